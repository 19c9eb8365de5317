"""
Tests for the utterance interpreter and its LLM classification fallback.
"""
from unittest.mock import MagicMock

from restaurant_bot.tasks.interpreter import UtteranceInterpreter
from restaurant_bot.tasks.parsers import classify_intent, parse_intent_label
from restaurant_bot.tasks.schemas import ConversationState, Intent

from tests.test_helpers import FakeGenerationClient


class TestParseIntentLabel:
    """Mapping classifier replies onto the closed label set."""

    def test_exact_label(self):
        assert parse_intent_label("CONFIRM_YES") == Intent.CONFIRM_YES

    def test_case_insensitive(self):
        assert parse_intent_label("  view_menu_again\n") == Intent.VIEW_MENU_AGAIN

    def test_label_inside_sentence(self):
        assert parse_intent_label("A intenção é CANCEL.") == Intent.CANCEL

    def test_unknown_text(self):
        assert parse_intent_label("não sei") == Intent.UNKNOWN

    def test_empty_and_none(self):
        assert parse_intent_label("") == Intent.UNKNOWN
        assert parse_intent_label(None) == Intent.UNKNOWN


class TestClassifyIntent:

    def test_without_client(self):
        assert classify_intent(None, ConversationState.SELECTING_DISHES, "desisto") == Intent.UNKNOWN

    def test_blank_utterance_skips_call(self):
        llm = FakeGenerationClient(default="CANCEL")
        assert classify_intent(llm, ConversationState.SELECTING_DISHES, "   ") == Intent.UNKNOWN
        assert llm.calls == []

    def test_prompt_carries_state_and_utterance(self):
        llm = FakeGenerationClient(default="CANCEL")
        result = classify_intent(llm, ConversationState.SELECTING_DRINKS, "deixa pra lá")

        assert result == Intent.CANCEL
        assert len(llm.calls) == 1
        call = llm.calls[0]
        assert "selecting_drinks" in call["prompt"]
        assert "deixa pra lá" in call["prompt"]
        assert call["temperature"] == 0.0

    def test_failed_call_is_unknown(self):
        llm = FakeGenerationClient(default=None)
        assert classify_intent(llm, ConversationState.AWAITING_PAYMENT, "hmm") == Intent.UNKNOWN

    def test_raising_client_is_unknown(self):
        llm = MagicMock()
        llm.complete.side_effect = RuntimeError("connection reset")
        assert classify_intent(llm, ConversationState.SELECTING_DISHES, "hmm") == Intent.UNKNOWN


class TestUtteranceInterpreter:

    def test_deterministic_match_does_not_consult_llm(self):
        llm = FakeGenerationClient(default="CANCEL")
        interpreter = UtteranceInterpreter(llm)

        result = interpreter.interpret(ConversationState.SELECTING_DISHES, "1 e 2")

        assert result.intent == Intent.ITEM_SELECTION
        assert result.selections == [1, 2]
        assert llm.calls == []

    def test_refusing_the_menu_does_not_consult_llm(self):
        llm = FakeGenerationClient(default="WANTS_MENU")
        result = UtteranceInterpreter(llm).interpret(
            ConversationState.AWAITING_MENU_CONSENT, "não quero ver o cardápio",
        )
        assert result.intent == Intent.UNKNOWN
        assert llm.calls == []

    def test_negation_wins_in_confirmation(self):
        llm = FakeGenerationClient(default="CONFIRM_YES")
        result = UtteranceInterpreter(llm).interpret(
            ConversationState.CONFIRMING_ORDER, "não, obrigado mas quero sim",
        )
        assert result.intent == Intent.CONFIRM_NO
        assert llm.calls == []

    def test_falls_back_to_llm(self):
        llm = FakeGenerationClient(default="VIEW_MENU_AGAIN")
        interpreter = UtteranceInterpreter(llm)

        result = interpreter.interpret(ConversationState.SELECTING_DISHES, "me mostra as opções de novo")

        assert result.intent == Intent.VIEW_MENU_AGAIN
        assert len(llm.calls) == 1

    def test_unknown_without_llm(self):
        interpreter = UtteranceInterpreter()
        result = interpreter.interpret(ConversationState.SELECTING_DISHES, "tem sobremesa?")
        assert result.intent == Intent.UNKNOWN

    def test_llm_failure_is_unknown(self):
        interpreter = UtteranceInterpreter(FakeGenerationClient(default=None))
        result = interpreter.interpret(ConversationState.AWAITING_PAYMENT, "como assim?")
        assert result.intent == Intent.UNKNOWN

    def test_initial_state_never_classifies(self):
        llm = FakeGenerationClient(default="CANCEL")
        interpreter = UtteranceInterpreter(llm)

        result = interpreter.interpret(ConversationState.INITIAL, "boa noite")

        assert result.intent == Intent.UNKNOWN
        assert llm.calls == []

    def test_blank_utterance(self):
        llm = FakeGenerationClient(default="CANCEL")
        result = UtteranceInterpreter(llm).interpret(ConversationState.SELECTING_DRINKS, "")
        assert result.intent == Intent.UNKNOWN
        assert llm.calls == []

    def test_llm_item_selection_without_digits(self):
        """Spelled-out numbers yield the intent with no selections."""
        interpreter = UtteranceInterpreter(FakeGenerationClient(default="ITEM_SELECTION"))
        result = interpreter.interpret(ConversationState.SELECTING_DISHES, "o primeiro e o segundo")
        assert result.intent == Intent.ITEM_SELECTION
        assert result.selections == []

    def test_payment_via_llm(self):
        interpreter = UtteranceInterpreter(FakeGenerationClient(default="PAY_CARD"))
        result = interpreter.interpret(ConversationState.AWAITING_PAYMENT, "na maquininha")
        assert result.payment_method is not None
        assert result.payment_method.label == "Cartão"


class TestInterpreterIsTotal:
    """Every state and utterance yields a member of the closed intent set."""

    UTTERANCES = ["", "   ", "oi", "sim", "não", "1 e 3", "pronto", "pix", "9999999999999999999", "🙂", "x" * 2000]

    def test_without_llm(self):
        interpreter = UtteranceInterpreter()
        for state in ConversationState:
            for text in self.UTTERANCES:
                result = interpreter.interpret(state, text)
                assert isinstance(result.intent, Intent)
                assert all(isinstance(n, int) for n in result.selections)

    def test_with_garbage_llm(self):
        interpreter = UtteranceInterpreter(FakeGenerationClient(default="??? not a label"))
        for state in ConversationState:
            for text in self.UTTERANCES:
                assert isinstance(interpreter.interpret(state, text).intent, Intent)
