import copy


class Configurable:
    """Objects configured through a class level ``defaults`` list

    Each entry of ``defaults`` is a ``(name, default, description)`` tuple.
    Values passed as keyword arguments to the constructor take precedence over
    ``global_defaults``, which take precedence over the defaults themselves.
    Lookups are lazy: the value is resolved on first access and then cached
    on the instance.
    """

    global_defaults = {}  # type: dict

    def __init__(self, **config):
        self._variable_defaults = {}
        self._user_config = config

    def add_defaults(self, defaults):
        """Add defaults to this object, overwriting any which already exist"""
        # Values are shallow copied so that a mutable default is never shared
        # between instances.
        self._variable_defaults.update((d[0], copy.copy(d[1])) for d in defaults)

    def __getattr__(self, name):
        if name in ("_variable_defaults", "_user_config"):
            raise AttributeError(name)
        found, value = self._find_default(name)
        if found:
            setattr(self, name, value)
            return value
        cname = self.__class__.__name__
        raise AttributeError(f"{cname} has no attribute: {name}")

    def _find_default(self, name):
        """Returns a tuple (found, value)"""
        defaults = self._variable_defaults.copy()
        defaults.update(self.global_defaults)
        defaults.update(self._user_config)
        if name in defaults:
            return (True, defaults[name])
        return (False, None)

    def describe_defaults(self):
        """Current value of every configurable option, keyed by name."""
        return {name: getattr(self, name) for name in self._variable_defaults}
