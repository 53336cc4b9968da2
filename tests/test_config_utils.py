import pytest

from grammar_scaffold.common.errors import ConfigError
from grammar_scaffold.utils.config_utils import DEFAULT_CONFIG, load_config


def test_default_config():
    config = load_config(None)
    assert config == DEFAULT_CONFIG
    assert config is not DEFAULT_CONFIG


def test_load_config(tmp_path):
    config_path = tmp_path / "scaffold.yaml"
    config_path.write_text(
        "import_path: github.com/antlr/grammars-v4\n"
        "max_tokens: 5000\n")

    config = load_config(str(config_path))

    assert config["import_path"] == "github.com/antlr/grammars-v4"
    assert config["max_tokens"] == 5000
    assert config["formatter"] == ["gofmt", "-w"]


def test_empty_config(tmp_path):
    config_path = tmp_path / "scaffold.yaml"
    config_path.write_text("")
    assert load_config(config_path) == DEFAULT_CONFIG


def test_missing_config(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "missing.yaml")


@pytest.mark.parametrize("body", [
    "max_tokens: 0\n",
    "max_tokens: lots\n",
    "formatter: []\n",
    "formatter: gofmt -w\n",
    "import_path: ''\n",
    "unknown_option: true\n",
    "- a list\n",
    "import_path: [unterminated\n",
])
def test_invalid_config(tmp_path, body):
    config_path = tmp_path / "scaffold.yaml"
    config_path.write_text(body)
    with pytest.raises(ConfigError):
        load_config(config_path)
