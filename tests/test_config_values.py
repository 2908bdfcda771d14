import pytest

from hyprlite.config_values import (
    STRVAL_EMPTY,
    ConfigError,
    ConfigStore,
    ConfigValue,
    default_values,
    device_default_values,
)


@pytest.fixture
def store():
    return ConfigStore()


def test_defaults_from_source(store):
    assert store.get_int("general:border_size") == 1
    assert store.get_int("general:col.inactive_border") == 0xFF444444
    assert store.get_string("general:layout") == "dwindle"


def test_empty_marker_reads_as_empty_string(store):
    assert store.values["input:kb_variant"].str_value == STRVAL_EMPTY
    assert store.get_string("input:kb_variant") == ""


def test_default_tables_are_fresh():
    first = default_values()
    first["general:gaps_in"].int_value = 99
    assert default_values()["general:gaps_in"].int_value != 99
    assert device_default_values()["repeat_rate"].int_value == default_values()["input:repeat_rate"].int_value


def test_unknown_key_gives_empty_value(store):
    assert store.get_value("nope:nothing") == ConfigValue()


def test_set_int_decimal(store):
    store.set_value("general:gaps_out", "33")
    assert store.get_int("general:gaps_out") == 33
    assert store.get_value("general:gaps_out").set is True


def test_set_int_hex(store):
    store.set_value("general:col.active_border", "0x66ee1111")
    assert store.get_int("general:col.active_border") == 0x66EE1111


@pytest.mark.parametrize("text,expected", [("yes", 1), ("on", 1), ("true", 1), ("no", 0), ("off", 0), ("false", 0)])
def test_set_int_booleans(store, text, expected):
    store.set_value("decoration:blur", text)
    assert store.get_int("decoration:blur") == expected


def test_set_int_reads_leading_digits(store):
    store.set_value("general:gaps_in", "12px")
    assert store.get_int("general:gaps_in") == 12


def test_set_int_rejects_garbage(store):
    with pytest.raises(ConfigError):
        store.set_value("general:gaps_in", "wide")


def test_set_float(store):
    store.set_value("general:sensitivity", "0.25")
    assert store.get_float("general:sensitivity") == 0.25


def test_set_float_rejects_garbage(store):
    with pytest.raises(ConfigError):
        store.set_value("general:sensitivity", "fast")


def test_set_string(store):
    store.set_value("general:layout", "master")
    assert store.get_string("general:layout") == "master"


def test_unknown_field_raises(store):
    with pytest.raises(ConfigError, match="No such field"):
        store.set_value("general:nonexistent", "1")


def test_variable_registration_and_substitution(store):
    store.set_value("$term", "kitty")
    assert store.variables == {"term": "kitty"}
    line = "bind=SUPER,Q,exec,$term"
    assert store.apply_variables(line, line.find("=")) == "bind=SUPER,Q,exec,kitty"


def test_apply_variables_without_equals_is_unchanged(store):
    store.set_value("$x", "y")
    assert store.apply_variables("$x", None) == "$x"


def test_apply_variables_ignores_text_before_start(store):
    store.set_value("$a", "b")
    line = "$a=$a"
    assert store.apply_variables(line, 2) == "$a=b"


def test_device_value_created_on_first_set(store):
    assert not store.device_exists("mouse-1")
    store.set_value("device:mouse-1:sensitivity", "0.5")
    assert store.device_exists("mouse-1")
    assert store.get_device_float("mouse-1", "sensitivity") == 0.5


def test_device_name_may_contain_colons(store):
    store.set_value("device:a:b:kb_layout", "de")
    assert store.device_exists("a:b")
    assert store.get_device_string("a:b", "kb_layout") == "de"


def test_device_unknown_option_raises(store):
    with pytest.raises(ConfigError):
        store.set_value("device:kbd:bogus", "1")


def test_device_falls_back_to_global(store):
    store.set_value("device:kbd:sensitivity", "1.5")
    store.set_value("input:repeat_rate", "40")
    assert store.get_device_int("kbd", "repeat_rate") == 40


def test_device_explicit_beats_global(store):
    store.set_value("device:kbd:repeat_rate", "10")
    store.set_value("input:repeat_rate", "40")
    assert store.get_device_int("kbd", "repeat_rate") == 10


def test_missing_device_gives_empty_value(store):
    assert store.get_device_value("ghost", "repeat_rate") == ConfigValue()


def test_reset_restores_defaults(store):
    store.set_value("general:gaps_in", "50")
    store.set_value("$v", "w")
    store.set_value("device:d:repeat_rate", "1")
    store.reset()
    assert store.get_int("general:gaps_in") == default_values()["general:gaps_in"].int_value
    assert store.variables == {}
    assert not store.device_exists("d")


def test_direct_setters(store):
    store.set_int("custom:int", 7)
    store.set_float("custom:float", 2.5)
    store.set_string("custom:str", "abc")
    assert store.get_int("custom:int") == 7
    assert store.get_float("custom:float") == 2.5
    assert store.get_string("custom:str") == "abc"