"""Load and save the root settings file together with its include files."""
from __future__ import annotations

import json
import os
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List, Optional

from .components import Components, components_of, flatten, ordered_sources, partition
from .errors import SettingsFileError, SettingsParseError, ValidationError, with_context
from .logging_utils import get_logger
from .model import SettingsData
from .resources import Resources
from .source_mapping import SourceMapping
from .validation import validate_data_integrity, validate_icons_availability, validate_unique_names

LOGGER = get_logger("Storage")


class SettingsFileStorage:
    """Reads the aggregate from disk and writes it back, file by file.

    ``load`` merges the root file with every include, validating as it goes.
    ``save`` re-partitions the aggregate by recorded source and rewrites each
    include plus the root file. Writes go through a temporary file and
    ``os.replace`` so a single file is never left half written; there is no
    transaction spanning several files.
    """

    def __init__(self, resources: Resources) -> None:
        self._resources = resources
        self._logger = LOGGER

    @property
    def resources(self) -> Resources:
        return self._resources

    # Loading ---------------------------------------------------------------

    def load(self) -> SettingsData:
        path = self._resources.settings_json()
        if path is None:
            missing = self._resources.settings_json_or()
            self._logger.warning("Settings file does not exist: %s", missing)
            raise SettingsFileError(f"Settings file does not exist: {missing}", str(missing))

        self._logger.info("Loading settings: %s", path)
        data = self._parse(path, SettingsData.from_dict)
        buckets: Dict[Optional[str], Components] = {None: components_of(data)}
        self._check(validate_unique_names, buckets[None], f"Validation error in main settings file '{path}'")

        for include in data.includes:
            include_path = self._resources.file(include)
            if include_path is None:
                self._logger.warning("Included settings file not found: %s", include)
                raise SettingsFileError(f"Included settings file not found: {include}", include)
            self._logger.info("Loading components: %s", include_path)
            components = self._parse(include_path, Components.from_dict)
            buckets.setdefault(include, Components()).extend(components)
            self._check(
                validate_unique_names,
                flatten(buckets),
                f"Validation error in included file '{include_path}'",
                source=include,
            )

        data = _merged(data, buckets)
        self._check(validate_data_integrity, data, "Settings data integrity validation failed")
        try:
            validate_icons_availability(data, self._resources)
        except ValidationError as exc:
            self._logger.warning("Icon availability validation failed: %s", exc)
            raise with_context(exc, "Icon availability validation failed") from exc
        return data

    def _check(self, validator, target, context: str, source: Optional[str] = None) -> None:
        try:
            validator(target)
        except ValidationError as exc:
            self._logger.warning("%s: %s", context, exc)
            error = with_context(exc, context)
            if source is not None and hasattr(error, "source"):
                error.source = source  # type: ignore[attr-defined]
            raise error from exc

    def _parse(self, path: Path, build):
        raw = self._read_json(path)
        try:
            return build(raw)
        except ValueError as exc:
            self._logger.warning("Invalid settings in %s: %s", path, exc)
            raise SettingsParseError(f"Failed to parse settings file '{path}': {exc}", str(path)) from exc

    def _read_json(self, path: Path) -> Dict[str, Any]:
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as exc:
            self._logger.warning("Unable to read %s: %s", path, exc)
            raise SettingsFileError(f"Unable to read settings file '{path}': {exc}", str(path)) from exc
        if not raw.strip():
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            self._logger.warning("Invalid JSON in %s: %s", path, exc)
            raise SettingsParseError(f"Failed to parse settings file '{path}': {exc}", str(path)) from exc
        if not isinstance(data, dict):
            self._logger.warning("%s must contain a JSON object at the root", path)
            raise SettingsParseError(f"{path} must contain a JSON object at the root", str(path))
        return data

    # Saving ----------------------------------------------------------------

    def save(self, data: SettingsData) -> SettingsData:
        """Write ``data`` out and return the aggregate a reload would produce.

        ``data`` itself is left untouched.
        """

        buckets = partition(components_of(data), data.source_mappings)
        includes = [source for source in ordered_sources(buckets) if source is not None]

        written: Dict[str, Dict[str, Any]] = {}
        for include in includes:
            payload = buckets[include].to_dict()
            path = self._resources.file(include) or self._resources.new_file(include)
            if path is None:
                path = self._resources.primary_dir / include
            self._logger.info("Saving components to: %s", path)
            self._write_json(path, payload)
            written[include] = payload

        root_components = buckets.get(None, Components())
        root = SettingsData(
            timeout=data.timeout,
            feedback=data.feedback,
            editor=data.editor,
            color_schemes=list(root_components.color_schemes),
            text_styles=list(root_components.text_styles),
            boards=list(root_components.boards),
            padsets=list(root_components.padsets),
            layout=data.layout,
            natural_key_order=data.natural_key_order,
            includes=includes,
        )
        root_payload = root.to_dict()
        root_path = self._resources.settings_json_or()
        self._logger.info("Saving main settings to: %s", root_path)
        self._write_json(root_path, root_payload)

        return self._rebuild(root_payload, written)

    def _rebuild(self, root_payload: Dict[str, Any], written: Dict[str, Dict[str, Any]]) -> SettingsData:
        saved = SettingsData.from_dict(root_payload)
        buckets: Dict[Optional[str], Components] = {None: components_of(saved)}
        for include in saved.includes:
            buckets.setdefault(include, Components()).extend(Components.from_dict(written[include]))
        return _merged(saved, buckets)

    def _write_json(self, path: Path, payload: Dict[str, Any]) -> None:
        text = json.dumps(payload, indent=2, ensure_ascii=False) + "\n"
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(text, encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError as exc:
            self._logger.warning("Failed to write %s: %s", path, exc)
            try:
                tmp_path.unlink(missing_ok=True)
            except OSError as cleanup_exc:
                self._logger.debug("Unable to remove %s: %s", tmp_path, cleanup_exc)
            raise SettingsFileError(f"Failed to write settings file '{path}': {exc}", str(path)) from exc


def _merged(data: SettingsData, buckets: Dict[Optional[str], Components]) -> SettingsData:
    """``data`` with its collections replaced by the buckets flattened in listed order."""

    merged = flatten(buckets)
    mappings: List[SourceMapping] = []
    for source, bucket in buckets.items():
        mappings.extend(bucket.mappings_for(source))
    return replace(
        data,
        color_schemes=merged.color_schemes,
        text_styles=merged.text_styles,
        boards=merged.boards,
        padsets=merged.padsets,
        source_mappings=mappings,
    )
