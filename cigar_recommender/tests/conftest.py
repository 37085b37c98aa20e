from unittest.mock import MagicMock

import pytest


def _mock_groq_response(content: str | None) -> MagicMock:
    message = MagicMock()
    message.content = content
    choice = MagicMock()
    choice.message = message
    response = MagicMock()
    response.choices = [choice]
    return response


@pytest.fixture
def groq_response():
    """Builder for a fake Groq chat completion carrying ``content``."""
    return _mock_groq_response
