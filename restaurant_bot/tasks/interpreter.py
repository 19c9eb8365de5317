"""
Utterance Interpreter.

Turns raw customer text into an Interpretation for the current conversation
state. Deterministic lexicons always run first; the generation collaborator
is consulted only when they match nothing and a collaborator is configured.
"""

import logging
from typing import Optional

from ..llm_client import GenerationClient
from .parsers import classify_intent, extract_numbers, parse_utterance_deterministic
from .schemas import ConversationState, Intent, Interpretation

logger = logging.getLogger(__name__)


class UtteranceInterpreter:
    """
    Classify utterances per conversation state.

    ``interpret`` is total: it never raises and answers UNKNOWN when nothing
    applies.
    """

    def __init__(self, llm: Optional[GenerationClient] = None):
        self.llm = llm

    def interpret(self, state: ConversationState, utterance: str) -> Interpretation:
        text = (utterance or "").strip()

        # Anything starts a conversation; no need to classify
        if state == ConversationState.INITIAL or not text:
            return Interpretation(intent=Intent.UNKNOWN)

        parsed = parse_utterance_deterministic(state, text)
        if parsed is not None:
            return parsed

        if self.llm is None:
            return Interpretation(intent=Intent.UNKNOWN)

        intent = classify_intent(self.llm, state, text)
        if intent == Intent.ITEM_SELECTION:
            # Numbers spelled out or otherwise missed by the lexicon
            return Interpretation(intent=intent, selections=extract_numbers(text))
        return Interpretation(intent=intent)
