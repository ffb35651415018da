import pytest

from libcountdown import configurable


class Thing(configurable.Configurable):
    defaults = [
        ("foo", 3, ""),
        ("items", [], ""),
    ]

    def __init__(self, **config):
        configurable.Configurable.__init__(self, **config)
        self.add_defaults(Thing.defaults)


def test_defaults():
    t = Thing()
    assert t.foo == 3

    t = Thing(foo=5)
    assert t.foo == 5


def test_mutable_defaults_not_shared():
    a = Thing()
    b = Thing()
    a.items.append(1)
    assert b.items == []


def test_global_defaults(monkeypatch):
    monkeypatch.setattr(Thing, "global_defaults", {"foo": 7})
    assert Thing().foo == 7
    assert Thing(foo=1).foo == 1


def test_missing_attribute():
    with pytest.raises(AttributeError):
        Thing().bar


def test_describe_defaults():
    assert Thing(foo=2).describe_defaults() == {"foo": 2, "items": []}
