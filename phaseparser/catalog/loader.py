"""
Catalog loader for custom boss phase definitions.

Allows users to add bosses or override phases via YAML files:

    bosses:
      2902:
        name: Ulgrax the Devourer
        zone: Nerub-ar Palace
        phases:
          P1: Stage One
          P2:
            name: Stage Two
            difficulties: [15, 16]
"""

import yaml
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from .bosses import Boss, PhaseDescriptor, find_by_boss_id, register_boss

logger = logging.getLogger(__name__)


class CatalogLoader:
    """Loads and applies custom phase catalogs from YAML files."""

    @staticmethod
    def load_catalog(catalog_path: Optional[str] = None) -> Dict[str, Any]:
        """
        Load a phase catalog from a YAML file.

        Args:
            catalog_path: Path to custom catalog file. If None, looks for:
                        1. phase_catalog.yaml in current directory
                        2. config/phase_catalog.yaml
                        3. ~/.loothing/phase_catalog.yaml
                        4. /etc/loothing/phase_catalog.yaml

        Returns:
            Catalog dictionary
        """
        search_paths = [
            Path("phase_catalog.yaml"),
            Path("config/phase_catalog.yaml"),
            Path.home() / ".loothing" / "phase_catalog.yaml",
            Path("/etc/loothing/phase_catalog.yaml"),
        ]

        if catalog_path:
            search_paths.insert(0, Path(catalog_path))

        for path in search_paths:
            if path.exists():
                try:
                    with open(path, "r") as f:
                        catalog = yaml.safe_load(f) or {}
                        logger.info(f"Loaded phase catalog from {path}")
                        return catalog
                except (OSError, yaml.YAMLError) as e:
                    logger.error(f"Failed to load phase catalog from {path}: {e}")

        logger.debug("No custom phase catalog found, using built-in bosses")
        return {}

    @staticmethod
    def _build_phase(key: str, value: Any) -> PhaseDescriptor:
        if isinstance(value, dict):
            metadata = dict(value)
            name = str(metadata.pop("name", key))
        else:
            metadata = {}
            name = str(value) if value is not None else key
        return PhaseDescriptor(key=key, name=name, metadata=metadata)

    @classmethod
    def apply_catalog(cls, catalog: Dict[str, Any]) -> int:
        """
        Register the bosses of a catalog dictionary.

        Bosses already known keep their name and zone unless overridden, and
        their phases are merged with the ones from the file.

        Args:
            catalog: Catalog dictionary from YAML

        Returns:
            Number of bosses registered
        """
        bosses = catalog.get("bosses") or {}
        if not isinstance(bosses, dict):
            logger.warning("Ignoring phase catalog: 'bosses' must be a mapping")
            return 0

        registered = 0
        for boss_id, entry in bosses.items():
            try:
                boss_id = int(boss_id)
            except (ValueError, TypeError) as e:
                logger.warning(f"Invalid boss ID {boss_id}: {e}")
                continue

            entry = entry or {}
            existing = find_by_boss_id(boss_id)
            phases = dict(existing.phases) if existing else {}
            for key, value in (entry.get("phases") or {}).items():
                phases[str(key)] = cls._build_phase(str(key), value)

            register_boss(
                Boss(
                    boss_id=boss_id,
                    name=entry.get("name") or (existing.name if existing else f"Boss {boss_id}"),
                    zone=entry.get("zone") or (existing.zone if existing else "Unknown"),
                    phases=phases,
                )
            )
            logger.debug(f"Registered boss {boss_id} with {len(phases)} phases")
            registered += 1

        logger.info(f"Phase catalog applied: {registered} bosses")
        return registered


def load_and_apply_catalog(catalog_path: Optional[str] = None) -> int:
    """
    Load and apply a phase catalog in one step.

    Args:
        catalog_path: Optional path to custom catalog file

    Returns:
        Number of bosses registered
    """
    loader = CatalogLoader()
    catalog = loader.load_catalog(catalog_path)
    if catalog:
        return loader.apply_catalog(catalog)
    return 0
