"""
CLI Tests
=========
Tests for the llm-cost command line interface.
"""

import pytest

from cost_estimator import cli
from cost_estimator.core.tokenizer import TokenizerAdapter


@pytest.fixture(autouse=True)
def word_tokenizer(monkeypatch: pytest.MonkeyPatch, tokenizer: TokenizerAdapter) -> None:
    """Use the word tokenizer so no encoding has to be downloaded."""
    monkeypatch.setattr("cost_estimator.core.session.get_tokenizer", lambda: tokenizer)


class TestModelsCommand:
    """Tests for the pricing table command."""

    def test_lists_models(self, capsys: pytest.CaptureFixture[str]):
        """Test that every model appears with formatted prices."""
        assert cli.main(["models"]) == 0

        out = capsys.readouterr().out
        lines = out.splitlines()
        assert lines[0].startswith("| Model")
        assert "Input Price (per 1K tokens)" in lines[0]
        assert set(lines[1]) <= {"|", "-", ":", " "}
        assert len(lines) == 2 + 14
        assert "GPT-4o mini" in lines[2]
        assert "$0.0002" in lines[2]
        assert "128k tokens" in lines[2]
        assert "Llama 2 70b" in out


class TestEstimateCommand:
    """Tests for the estimate command."""

    def test_estimate_with_token_counts(self, capsys: pytest.CaptureFixture[str]):
        """Test the GPT-4o mini scenario from the command line."""
        code = cli.main([
            "estimate",
            "--model", "GPT-4o mini",
            "--input-tokens", "1000",
            "--output-tokens", "1000",
            "--users", "1000",
        ])

        assert code == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "$0.75"
        assert "Based on 1000 users" in lines
        assert "Provider: OpenAI" in lines

    def test_estimate_from_text(self, capsys: pytest.CaptureFixture[str]):
        """Test that example text is tokenized."""
        code = cli.main([
            "estimate",
            "--input-text", "one two three",
            "--output-text", "four five",
            "--users", "10",
        ])

        assert code == 0
        lines = capsys.readouterr().out.splitlines()
        assert "3 input tokens" in lines
        assert "2 output tokens" in lines

    def test_token_count_overrides_text(self, tmp_path, capsys: pytest.CaptureFixture[str]):
        """Test that explicit counts win over text read from a file."""
        prompt = tmp_path / "prompt.txt"
        prompt.write_text("a b c d", encoding="utf-8")

        code = cli.main(["estimate", "--input-file", str(prompt), "--input-tokens", "9"])

        assert code == 0
        assert "9 input tokens" in capsys.readouterr().out.splitlines()

    def test_invalid_users_become_zero(self, capsys: pytest.CaptureFixture[str]):
        """Test that an unparseable user count is treated as 0."""
        code = cli.main(["estimate", "--input-tokens", "500", "--users", "lots"])

        assert code == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "$0.00"
        assert "Based on 0 users" in lines

    def test_context_window_warning(self, capsys: pytest.CaptureFixture[str]):
        """Test the warning when a request exceeds the context window."""
        code = cli.main(["estimate", "--model", "GPT-4 8k", "--input-tokens", "9000"])

        assert code == 0
        assert "exceed the 8,000 token context window" in capsys.readouterr().out

    def test_unknown_model(self, capsys: pytest.CaptureFixture[str]):
        """Test that an unknown model fails with status 2."""
        code = cli.main(["estimate", "--model", "nonexistent-model"])

        assert code == 2
        assert "nonexistent-model" in capsys.readouterr().err

    def test_missing_input_file(self, tmp_path, capsys: pytest.CaptureFixture[str]):
        """Test that an unreadable input file is reported."""
        code = cli.main(["estimate", "--input-file", str(tmp_path / "missing.txt")])

        assert code == 1
        assert "error" in capsys.readouterr().err
