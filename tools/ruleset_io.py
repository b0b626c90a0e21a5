import hashlib
import json
from pathlib import Path

from simulator.errors import MalformedTable
from simulator.rule_table import RuleTable


def hash_ruleset(table):
    """Hash a rule table's flat rows deterministically."""
    rules_json = json.dumps(table.to_rows(), sort_keys=True)
    return hashlib.sha256(rules_json.encode('utf-8')).hexdigest()


def parse_rules(data):
    """Accept either a bare list of rows or {"name": ..., "rows": [...]}."""
    if isinstance(data, dict):
        if "rows" not in data:
            raise MalformedTable("Rule file object must have a 'rows' key")
        data = data["rows"]
    if not isinstance(data, list) or not all(isinstance(row, list) for row in data):
        raise MalformedTable("Rule file must hold a list of rows")
    return RuleTable.from_rows(data)


def load_rules(path):
    """Load and validate a rule table from a JSON file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Rule file {path} not found.")
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as exc:
            raise MalformedTable(f"Rule file {path} is not valid JSON: {exc}") from exc
    return parse_rules(data)


def save_rules(path, table, name=None):
    """Write ``table`` as JSON rows; returns the path written."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {"rows": table.to_rows()}
    if name is not None:
        payload = {"name": name, **payload}
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)
    return str(path)
