from unittest.mock import patch

from openapi_llm_text.llm import DEFAULT_MODEL, TokenCounter


class TestTokenCounter:
    def test_default_model(self):
        counter = TokenCounter()
        assert counter.model == DEFAULT_MODEL

    def test_custom_model(self):
        counter = TokenCounter(model="gpt-4o")
        assert counter.model == "gpt-4o"

    @patch("openapi_llm_text.llm.token_counter")
    def test_count_returns_tokens(self, mock_token_counter):
        mock_token_counter.return_value = 42

        counter = TokenCounter(model="gpt-4o")
        assert counter.count("API: T v1\n") == 42
        mock_token_counter.assert_called_once()

    @patch("openapi_llm_text.llm.token_counter")
    def test_count_passes_model_and_text(self, mock_token_counter):
        mock_token_counter.return_value = 1

        TokenCounter(model="claude-sonnet-4-20250514").count("hello")

        call_kwargs = mock_token_counter.call_args[1]
        assert call_kwargs["model"] == "claude-sonnet-4-20250514"
        assert call_kwargs["text"] == "hello"
