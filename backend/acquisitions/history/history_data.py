"""
Year 5 history data selection, scopes and analysis config
"""

import json
import logging
from pathlib import Path

import yaml

from .. import helper_functions as hf
from .history_definitions import HISTORY_LEVEL, HISTORY_SUBJECT

DISTRICT_LABEL = "المقاطعة"

DEFAULT_CONFIG = {
    "history_level": HISTORY_LEVEL,
    "history_subject": HISTORY_SUBJECT,
    "secondary_level": hf.DEFAULT_SECONDARY_LEVEL,
    "secondary_subject": hf.DEFAULT_SECONDARY_SUBJECT,
    "reading_competency": hf.DEFAULT_READING_COMPETENCY,
    "reading_criteria": list(hf.DEFAULT_READING_CRITERIA),
    "district_name": DISTRICT_LABEL,
    "selected_schools": [],
    "selected_classes": [],
    "include_district_scope": True,
}


def load_config_from_args(config_json_str):
    """Load config from JSON string passed via command line"""
    if not config_json_str or config_json_str == "{}":
        return {}
    try:
        cfg = json.loads(config_json_str)
    except json.JSONDecodeError as e:
        logging.warning(f"[History Y5] Ignoring unparseable config JSON: {e}")
        return {}
    return cfg if isinstance(cfg, dict) else {}


def load_config_file(config_path):
    """Load a YAML (or JSON) config file. A missing file is an error."""
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f) or {}
    if not isinstance(cfg, dict):
        raise ValueError(f"Config file must contain a mapping, got {type(cfg).__name__}")
    return cfg


def resolve_config(cfg=None):
    """Defaults overlaid with the keys present in cfg."""
    resolved = dict(DEFAULT_CONFIG)
    for k, v in (cfg or {}).items():
        if v is not None:
            resolved[k] = v
    return resolved


def select_history_records(records, cfg=None):
    """Class records of the history subject at the history level"""
    cfg = resolve_config(cfg)
    return [
        r
        for r in records or []
        if r.get("level") == cfg["history_level"] and cfg["history_subject"] in (r.get("subject") or "")
    ]


def filter_scope_records(records, scope="district", school_name=None, class_name=None):
    """
    Narrow records to a district, school or class view.

    School and class names are compared exactly, as they come from the
    same upload.
    """
    out = []
    for r in records or []:
        if scope in ("school", "class") and r.get("schoolName") != school_name:
            continue
        if scope == "class" and r.get("className") != class_name:
            continue
        out.append(r)
    return out


def scope_context_name(scope="district", school_name=None, class_name=None, district_label=DISTRICT_LABEL):
    """Display name of a scope, also used to key narrative overrides"""
    if scope == "school":
        return school_name
    if scope == "class":
        return f"{school_name} - {class_name}"
    return district_label


def _parse_class_selection(item):
    """Accept "School/Class", ["School", "Class"] or {"school": .., "class": ..}."""
    if isinstance(item, dict):
        return item.get("school"), item.get("class")
    if isinstance(item, (list, tuple)) and len(item) == 2:
        return item[0], item[1]
    if isinstance(item, str) and "/" in item:
        school, cls = item.split("/", 1)
        return school.strip(), cls.strip()
    return None, None


def get_scopes(records, cfg):
    """
    Generate list of (scope_records, scope, context_name, folder_name) tuples

    District first (unless disabled), then each selected school, then each
    selected class. Scopes with no records are skipped.
    """
    cfg = resolve_config(cfg)
    district_label = cfg.get("district_name") or DISTRICT_LABEL
    if isinstance(district_label, list):
        district_label = district_label[0] if district_label else DISTRICT_LABEL

    scopes = []
    if cfg.get("include_district_scope", True):
        scopes.append((list(records or []), "district", district_label, "_district"))

    available_schools = sorted({r.get("schoolName") for r in records or [] if r.get("schoolName")})
    for school in cfg.get("selected_schools") or []:
        if school not in available_schools:
            logging.warning(f"[Scope Filter] Selected school not found: {school}")
            continue
        scope_records = filter_scope_records(records, "school", school)
        scopes.append((scope_records, "school", school, school.replace(" ", "_")))

    for item in cfg.get("selected_classes") or []:
        school, cls = _parse_class_selection(item)
        if not school or not cls:
            logging.warning(f"[Scope Filter] Unrecognized class selection: {item!r}")
            continue
        scope_records = filter_scope_records(records, "class", school, cls)
        if not scope_records:
            logging.warning(f"[Scope Filter] No records for class {school} / {cls}")
            continue
        context = scope_context_name("class", school, cls)
        scopes.append((scope_records, "class", context, f"{school}_{cls}".replace(" ", "_")))

    return scopes
