import dataclasses

import pytest

from polo_collector.config import (
    DEFAULT_CONFIG,
    CollectionConfig,
    ConfigError,
    build_config,
    resolve,
    value_or_default,
)


def write_yaml(tmp_path, text):
    path = tmp_path / "queries.yml"
    path.write_text(text, encoding="utf-8")
    return path


def test_missing_file_returns_defaults(tmp_path):
    cfg = resolve(tmp_path / "does-not-exist.yml")
    assert cfg == DEFAULT_CONFIG
    assert cfg.queries[0] == "domestic worker abuse"
    assert cfg.destinations == ("SA", "HK", "AE", "IT")
    assert cfg.languages == ("lang_en", "lang_tl")
    assert cfg.tbs is None
    assert cfg.pages == 10
    assert cfg.pause == (0.8, 1.6)
    assert cfg.trends_time == "all"


def test_override_only_pages(tmp_path):
    cfg = resolve(write_yaml(tmp_path, "pages: 3\n"))
    assert cfg == dataclasses.replace(DEFAULT_CONFIG, pages=3)


def test_empty_trends_time_falls_back_to_all(tmp_path):
    cfg = resolve(write_yaml(tmp_path, 'trends_time: ""\n'))
    assert cfg.trends_time == "all"


@pytest.mark.parametrize("text", ["pages: 2\n", "tbs:\n", "tbs: null\n", "tbs: NULL\n", 'tbs: ""\n'])
def test_tbs_absent_stays_none(tmp_path, text):
    cfg = resolve(write_yaml(tmp_path, text))
    assert cfg.tbs is None


def test_tbs_value_is_kept(tmp_path):
    cfg = resolve(write_yaml(tmp_path, "tbs: qdr:y\n"))
    assert cfg.tbs == "qdr:y"


def test_pause_ints_become_floats(tmp_path):
    cfg = resolve(write_yaml(tmp_path, "pause: [1, 2]\n"))
    assert cfg.pause == (1.0, 2.0)
    assert all(type(v) is float for v in cfg.pause)


def test_non_numeric_pages_is_fatal(tmp_path):
    with pytest.raises(ConfigError, match="pages"):
        resolve(write_yaml(tmp_path, "pages: lots\n"))


def test_numeric_string_pages_is_coerced(tmp_path):
    assert resolve(write_yaml(tmp_path, 'pages: "4"\n')).pages == 4


def test_scalar_query_becomes_single_item_tuple(tmp_path):
    cfg = resolve(write_yaml(tmp_path, "queries: kasambahay\n"))
    assert cfg.queries == ("kasambahay",)
    assert cfg.destinations == DEFAULT_CONFIG.destinations


def test_empty_file_returns_defaults(tmp_path):
    assert resolve(write_yaml(tmp_path, "")) == DEFAULT_CONFIG


def test_non_mapping_file_is_fatal(tmp_path):
    with pytest.raises(ConfigError):
        resolve(write_yaml(tmp_path, "- just\n- a list\n"))


@pytest.mark.parametrize(
    "raw",
    [
        {"pages": 0},
        {"pages": 2.5},
        {"pages": True},
        {"pause": [2, 1]},
        {"pause": [-1, 1]},
        {"pause": [1]},
        {"pause": ["a", 1]},
        {"queries": []},
        {"languages": {"en": 1}},
        {"pause": [float("nan"), 1]},
        {"pause": [0, float("inf")]},
        {"queries": ["", "kasambahay"]},
        {"queries": [None, "kasambahay"]},
        {"queries": ["  "]},
        {"destinations": [["SA"]]},
    ],
)
def test_bad_values_raise(raw):
    with pytest.raises(ConfigError):
        build_config(raw)


def test_config_is_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_CONFIG.pages = 1
    assert isinstance(DEFAULT_CONFIG, CollectionConfig)


def test_value_or_default():
    assert value_or_default(None, 1) == 1
    assert value_or_default("", "x") == "x"
    assert value_or_default(0, 10) == 0
    assert value_or_default([], ["a"]) == []


@pytest.mark.parametrize(
    "text",
    [
        "trends_time: [a, b]\n",
        "trends_time: {x: 1}\n",
        "trends_time: true\n",
        "tbs: [qdr, y]\n",
        "tbs: {qdr: y}\n",
    ],
)
def test_non_scalar_time_window_is_fatal(tmp_path, text):
    with pytest.raises(ConfigError):
        resolve(write_yaml(tmp_path, text))


def test_special_floats_in_yaml_are_fatal(tmp_path):
    with pytest.raises(ConfigError, match="finite"):
        resolve(write_yaml(tmp_path, "pause: [.nan, 1]\n"))
    with pytest.raises(ConfigError, match="finite"):
        resolve(write_yaml(tmp_path, "pause: [0, .inf]\n"))
