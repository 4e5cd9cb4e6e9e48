import json
from collections.abc import Mapping
from types import MappingProxyType

from event_mapper.errors.exceptions import DefinitionError


def _path_problem(attr, keys):
    if not isinstance(keys, list):
        return f"'{attr}': expected a list of keys, got {type(keys).__name__}"
    if not keys:
        return f"'{attr}': key path is empty"
    for i, key in enumerate(keys):
        if not isinstance(key, str):
            return f"'{attr}': key #{i} is {type(key).__name__}, not a string"
    return None


def validate_definition(parsed):
    """
    Validate a loaded definition and convert it to {attr: tuple(keys)}.

    Every violation is collected before raising, so a single DefinitionError
    describes the whole definition.
    """
    if not isinstance(parsed, Mapping):
        raise DefinitionError(
            f"Event mapping must be an object, got {type(parsed).__name__}"
        )

    problems = []
    event_mapping = {}
    for attr, keys in parsed.items():
        if not isinstance(attr, str):
            problems.append(f"{attr!r}: attribute name is not a string")
            continue

        problem = _path_problem(attr, keys)
        if problem:
            problems.append(problem)
            continue

        event_mapping[attr] = tuple(keys)

    if problems:
        raise DefinitionError(
            f"Invalid event mapping: {'; '.join(problems)}", problems
        )

    return event_mapping


def parse_definition(event_mapping_json):
    """
    Parse a JSON event mapping such as
    {"message": ["message"], "logfile": ["log", "file", "path"]}.
    """
    if not isinstance(event_mapping_json, (str, bytes, bytearray)):
        raise DefinitionError(
            f"Event mapping must be a JSON string, got {type(event_mapping_json).__name__}"
        )

    try:
        parsed = json.loads(event_mapping_json)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DefinitionError(f"Event mapping is not valid JSON: {e}") from e

    return validate_definition(parsed)


def read_only(event_mapping):
    return MappingProxyType(event_mapping)
