import importlib
from typing import Any


def is_simple_literal(value) -> bool:
    return value is None or isinstance(value, (bool, int, float, complex, str))


def get_type(module_name: str, class_name: str) -> type:
    module = importlib.import_module(module_name)
    result = getattr(module, class_name)
    if not isinstance(result, type):
        raise TypeError(result)
    return result


def parse_value(text: str) -> Any:
    """Convert the text of a parameter file value to a bool, int, float or
    string, in that order of preference."""
    text = text.strip()
    lowered = text.lower()
    if lowered in ('true', 'yes', 'on'):
        return True
    if lowered in ('false', 'no', 'off'):
        return False
    if lowered in ('none', 'null', ''):
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return text


def read_parameter_file(path: str) -> dict[str, Any]:
    """Read a parameter file of NAME=VALUE lines. Anything following a '#'
    is a comment; blank lines are ignored. Return a dict mapping each name
    to its parsed value. Raise ValueError on a line with no '=' or with
    an empty value."""
    parameters = {}
    with open(path, encoding='utf-8') as parameter_file:
        for line_number, line in enumerate(parameter_file, 1):
            line = line.split('#', 1)[0].strip()
            if not line:
                continue
            if '=' not in line:
                raise ValueError("%s, line %d: expected NAME=VALUE, got %r" %
                                 (path, line_number, line))
            name, value = line.split('=', 1)
            if not value.strip():
                raise ValueError("%s, line %d: no value given for %s" %
                                 (path, line_number, name.strip()))
            parameters[name.strip()] = parse_value(value)
    return parameters


class Configurable:

    @classmethod
    def build(cls, config: dict[str, Any]) -> 'Configurable':
        subclass = get_type(config['__module__'], config['__class__'])
        if subclass is not cls:
            assert issubclass(subclass, cls)
            return subclass.build(config)
        instance = cls()
        instance.configure(config)
        return instance

    def get_configuration(self) -> dict[str, Any]:
        config = dict(__module__=type(self).__module__, __class__=type(self).__name__)
        for property_name in dir(self):
            if property_name.startswith('_'):
                continue
            property_value = getattr(self, property_name)
            if is_simple_literal(property_value):
                config[property_name] = property_value
            elif isinstance(property_value, Configurable):
                config[property_name] = property_value.get_configuration()
        return config

    def configure(self, config: dict[str, Any]) -> None:
        assert config['__module__'] == type(self).__module__
        assert config['__class__'] == type(self).__name__
        for property_name in dir(self):
            if property_name not in config:
                continue
            property_default = getattr(self, property_name)
            property_override = config[property_name]
            if isinstance(property_default, Configurable):
                property_default.configure(property_override)
            elif is_simple_literal(property_default) and is_simple_literal(property_override):
                if isinstance(getattr(type(self), property_name, None), property):
                    # Read-only views of the configuration are skipped.
                    continue
                setattr(self, property_name, property_override)
