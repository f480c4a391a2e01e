from typer.testing import CliRunner

from api.cli import app

runner = CliRunner()


def test_articles_lists_config(config_file):
    result = runner.invoke(app, ["articles", "--config", str(config_file)])
    assert result.exit_code == 0, result.output
    assert "adam" in result.output


def test_preview_masks_blurred_words(config_file):
    result = runner.invoke(app, ["preview", "0", "--config", str(config_file)])
    assert result.exit_code == 0, result.output
    assert "█████" in result.output
    assert "Adam" not in result.output.replace("Article adam", "")


def test_preview_after_reveal(config_file):
    result = runner.invoke(app, ["preview", "0", "--config", str(config_file), "--reveal", "w1"])
    assert result.exit_code == 0, result.output
    assert "2 instances unlocked" in result.output
    assert "█████" not in result.output


def test_preview_unknown_token_exits_with_error(config_file):
    result = runner.invoke(app, ["preview", "0", "--config", str(config_file), "--reveal", "w999"])
    assert result.exit_code == 1
    assert "Word not found" in result.output


def test_preview_unknown_index_exits_with_error(config_file):
    result = runner.invoke(app, ["preview", "5", "--config", str(config_file)])
    assert result.exit_code == 1
    assert "Invalid article index" in result.output


def test_preview_missing_config_exits_with_error(tmp_path):
    result = runner.invoke(app, ["preview", "0", "--config", str(tmp_path / "missing.json")])
    assert result.exit_code == 1
    assert "Cannot read article config" in result.output
