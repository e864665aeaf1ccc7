"""
Load a recorded sequence of runner events.

An event script is a YAML (or JSON) list of mappings, each naming the
event and carrying its payload fields:

    - event: suite
      title: Array
    - event: fail
      title: rejects negatives
      err:
        message: "expected -1 to be above 0"
        actual: -1
        expected: 0
        show_diff: true
    - event: end
"""

from pathlib import Path
from typing import Any, Dict, List

import yaml

from base_reporter.core.errors import EventReplayError
from base_reporter.reporting import events
from base_reporter.reporting.models import ErrorRecord, SuiteRecord, TestRecord

TEST_FIELDS = ("title", "full_title", "duration", "slow")
ERROR_FIELDS = ("message", "stack", "actual", "expected", "show_diff", "uncaught")


def _pick(item: Dict[str, Any], keys, where: str) -> Dict[str, Any]:
    unknown = set(item) - set(keys) - {"event", "err", "root"}
    if unknown:
        raise EventReplayError(f"{where}: unknown field(s) {', '.join(sorted(unknown))}")
    return {key: item[key] for key in keys if item.get(key) is not None}


def _error(data: Any, where: str) -> ErrorRecord:
    if not isinstance(data, dict):
        raise EventReplayError(f"{where}: 'err' must be a mapping")
    unknown = set(data) - set(ERROR_FIELDS)
    if unknown:
        raise EventReplayError(f"{where}: unknown error field(s) {', '.join(sorted(unknown))}")
    return ErrorRecord(**{key: value for key, value in data.items() if value is not None})


def _test(item: Dict[str, Any], where: str) -> TestRecord:
    test = TestRecord(**_pick(item, TEST_FIELDS, where))
    if item.get("err") is not None:
        test.err = _error(item["err"], where)
    return test


def parse_event(item: Any, position: int = 0) -> events.Event:
    """Turn one mapping into an event payload."""
    where = f"event #{position + 1}"
    if not isinstance(item, dict) or "event" not in item:
        raise EventReplayError(f"{where}: expected a mapping with an 'event' key")

    name = item["event"]
    if name not in events.EVENT_TYPES:
        raise EventReplayError(f"{where}: unknown event {name!r}")

    if name in (events.START, events.END):
        return events.EVENT_TYPES[name]()
    if name in (events.SUITE, events.SUITE_END):
        fields = _pick(item, ("title",), where)
        return events.EVENT_TYPES[name](SuiteRecord(root=bool(item.get("root", False)), **fields))
    test = _test(item, where)
    if name == events.FAIL:
        return events.Fail(test=test, err=test.err)
    return events.EVENT_TYPES[name](test=test)


def parse_events(data: Any) -> List[events.Event]:
    """Turn a loaded event script into payloads, in order."""
    if not isinstance(data, list):
        raise EventReplayError("event script must be a list of events")
    return [parse_event(item, i) for i, item in enumerate(data)]


def load_events(path: Path) -> List[events.Event]:
    """Read and parse an event script file."""
    try:
        data = yaml.safe_load(Path(path).read_text())
    except (OSError, yaml.YAMLError) as e:
        raise EventReplayError(f"Failed to read event script {path}: {e}") from e
    return parse_events(data)


def replay(event_list: List[events.Event], emitter: events.EventEmitter) -> None:
    """Emit every event in order."""
    for event in event_list:
        emitter.emit(event)
