#!/usr/bin/env python3
"""
Point Group Store

Persists emitted point groups as VTK PolyData files so a dataset that was
already processed can be loaded again without re-ingesting the source.

Layout: ``<root>/<dataset>/<dataset><index>.vtp`` plus a metadata JSON file
that is written last and marks the dataset as complete.
"""

import json
import logging
import shutil
from pathlib import Path
from typing import Any, Dict, List, Union

import pyvista as pv

from ..config import FileConfig
from ..error_handling import PointGroupStoreError


logger = logging.getLogger(__name__)


class PointGroupStore:
    """Directory of stored point groups, one sub-directory per dataset."""

    def __init__(self, root: Union[str, Path] = FileConfig.DEFAULT_STORE_DIR):
        self.root = Path(root)

    def dataset_dir(self, name: str) -> Path:
        return self.root / name

    def mesh_path(self, name: str, index: int) -> Path:
        return self.dataset_dir(name) / f"{name}{index}{FileConfig.MESH_SUFFIX}"

    def metadata_path(self, name: str) -> Path:
        return self.dataset_dir(name) / FileConfig.METADATA_FILENAME

    def has(self, name: str) -> bool:
        """Check if the dataset was processed to completion before."""
        return self.metadata_path(name).is_file()

    def save_group(self, name: str, index: int, mesh: pv.PolyData) -> Path:
        """Write one point group and return its path."""
        path = self.mesh_path(name, index)
        path.parent.mkdir(parents=True, exist_ok=True)
        mesh.save(str(path))
        return path

    def write_metadata(self, name: str, metadata: Dict[str, Any]) -> None:
        """Mark the dataset complete."""
        path = self.metadata_path(name)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            json.dump(metadata, f, indent=2)
        logger.info(f"Stored {metadata.get('num_batches', 0)} point groups in {path.parent}")

    def read_metadata(self, name: str) -> Dict[str, Any]:
        try:
            with open(self.metadata_path(name), 'r') as f:
                return json.load(f)
        except FileNotFoundError:
            raise PointGroupStoreError(f"No stored point groups for '{name}' in {self.root}") from None
        except json.JSONDecodeError as e:
            raise PointGroupStoreError(f"Corrupt point group metadata for '{name}': {e}") from e

    def load(self, name: str) -> List[pv.PolyData]:
        """
        Load the stored point groups of a dataset in batch order.

        Raises:
            PointGroupStoreError: If the metadata or a group file is missing
        """
        metadata = self.read_metadata(name)
        groups = []
        for index in range(int(metadata.get('num_batches', 0))):
            path = self.mesh_path(name, index)
            if not path.is_file():
                raise PointGroupStoreError(f"Stored point group missing: {path}")
            groups.append(pv.read(str(path)))

        logger.info(f"Using previously loaded point cloud: {name} ({len(groups)} point groups)")
        return groups

    def clear(self, name: str) -> None:
        """Remove everything stored for the dataset."""
        directory = self.dataset_dir(name)
        if directory.exists():
            shutil.rmtree(directory)
            logger.info(f"Removed stored point groups in {directory}")
