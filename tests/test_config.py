import pytest

from jsminerr.config import ConfigError, MinerrConfig, load_config, load_config_from_string


def test_defaults_without_table():
    config = load_config_from_string("[project]\nname = 'app'\n")
    assert config == MinerrConfig()
    assert config.factory_name == "minErr"
    assert config.suffix == "MinErr"
    assert config.replacement_source() is None


def test_table_overrides_defaults():
    config = load_config_from_string(
        "[tool.jsminerr]\n"
        "factory_name = 'makeErr'\n"
        "suffix = 'Err'\n"
        "substitution = 'function makeErr(m) { return m; }'\n"
    )
    assert config.factory_name == "makeErr"
    assert config.suffix == "Err"
    assert config.replacement_source() == "function makeErr(m) { return m; }"


@pytest.mark.parametrize("body", [
    "unknown = 1\n",
    "factory_name = ''\n",
    "suffix = 'not valid'\n",
    "factory_name = 3\n",
    "substitution = 'x'\nsubstitution_path = 'y.js'\n",
])
def test_invalid_tables_raise(body):
    with pytest.raises(ConfigError):
        load_config_from_string("[tool.jsminerr]\n" + body)


def test_invalid_toml_raises_config_error():
    with pytest.raises(ConfigError):
        load_config_from_string("[tool.jsminerr\n")


def test_load_config_from_directory(tmp_path):
    (tmp_path / "minerr.js").write_text("function minErr(m) { return m; }\n", encoding="utf-8")
    (tmp_path / "pyproject.toml").write_text(
        "[tool.jsminerr]\nsubstitution_path = 'minerr.js'\n", encoding="utf-8")
    config = load_config(tmp_path)
    assert config.replacement_source(tmp_path) == "function minErr(m) { return m; }\n"


def test_missing_pyproject_gives_defaults(tmp_path):
    assert load_config(tmp_path) == MinerrConfig()


def test_unreadable_substitution_path(tmp_path):
    config = MinerrConfig(substitution_path="missing.js")
    with pytest.raises(ConfigError):
        config.replacement_source(tmp_path)
