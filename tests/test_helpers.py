"""
Helper classes for tests.

Provides a scripted stand-in for the generation client so tests never reach
the OpenAI API.
"""

TEST_ADDRESS = "+5511999990000"


class FakeGenerationClient:
    """Scripted stand-in for GenerationClient.

    Returns the queued replies in order, then ``default``. Every call is
    recorded so tests can assert on prompts and on whether it was consulted.
    """

    def __init__(self, replies=None, default=None):
        self.replies = list(replies or [])
        self.default = default
        self.calls = []

    def complete(self, prompt, system=None, temperature=0.7):
        self.calls.append({"prompt": prompt, "system": system, "temperature": temperature})
        if self.replies:
            return self.replies.pop(0)
        return self.default
