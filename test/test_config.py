from datetime import datetime, timezone
from pathlib import Path

import pytest

from libcountdown import confreader

configs_dir = Path(__file__).resolve().parent / "configs"


def load_config(name):
    f = confreader.Config(configs_dir / name)
    f.load()
    return f


def test_basic():
    f = load_config("countdown_basic.py")
    f.validate()
    assert f.expires == datetime(2030, 1, 1, 12, 0, tzinfo=timezone.utc)
    assert f.countdown_defaults["update_interval"] == 0.5
    assert f.sink == "code_countdown"


def test_falls_back():
    f = load_config("countdown_basic.py")
    # Not set in the file, comes from the default config
    assert f.log_level == "WARNING"


def test_string_expiry():
    f = load_config("countdown_string_expiry.py")
    f.validate()
    assert f.expires == datetime(2030, 1, 1, 12, 0, tzinfo=timezone.utc)
    assert f.log_level == "DEBUG"
    assert f.sink == "countdown_text"


def test_no_file():
    f = confreader.Config()
    f.load()
    f.validate()
    assert f.expires is None
    assert f.countdown_defaults == {}


def test_settings_take_precedence():
    f = confreader.Config(sink="other", expires=0)
    f.validate()
    assert f.sink == "other"
    assert f.expires == datetime(1970, 1, 1, tzinfo=timezone.utc)


def test_missing_file():
    f = confreader.Config(configs_dir / "does_not_exist.py")
    with pytest.raises(confreader.ConfigError):
        f.load()


@pytest.mark.parametrize("name", ["countdown_bad_interval.py", "countdown_bad_expiry.py"])
def test_validate(name):
    f = load_config(name)
    with pytest.raises(confreader.ConfigError):
        f.validate()


def test_bad_log_level():
    f = confreader.Config(log_level="chatty")
    with pytest.raises(confreader.ConfigError):
        f.validate()


def test_syntaxerr():
    with pytest.raises(SyntaxError):
        load_config("countdown_syntaxerr.py")
