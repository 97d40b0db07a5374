"""Tests for PolyData point groups, the point group store and the scene loader."""
from __future__ import annotations

import numpy as np
import pytest

from pointgroups.config import IngestionConfig
from pointgroups.error_handling import PointGroupStoreError
from pointgroups.geometry import PointGroupStore, PolyDataGeometryConsumer, to_polydata
from pointgroups.pipeline import PointCloudIngestor, PointCloudSceneLoader


def lines(count):
    return [f"{i},{i + 1},{i + 2},255,128,0" for i in range(count)]


def test_to_polydata_has_vertices_and_colours():
    positions = np.array([[0.0, 0.0, 0.0], [1.0, 2.0, 3.0]])
    colors = np.array([[1.0, 0.0, 0.0], [0.0, 0.5, 1.0]], dtype=np.float32)

    cloud = to_polydata(positions, colors)

    assert cloud.n_points == 2
    assert cloud.n_verts == 2
    np.testing.assert_array_equal(cloud["RGB"], [[255, 0, 0], [0, 128, 255]])
    np.testing.assert_allclose(cloud["colors"], colors)


def test_to_polydata_rejects_mismatched_lengths():
    with pytest.raises(ValueError):
        to_polydata(np.zeros((2, 3)), np.zeros((3, 3)))


def test_polydata_consumer_names_groups(write_xyz):
    path = write_xyz(lines(5), name="site.xyz")
    consumer = PolyDataGeometryConsumer()

    PointCloudIngestor(IngestionConfig(batch_capacity=2), consumer).ingest(path)

    assert consumer.names == ["site0", "site1", "site2"]
    assert [group.n_points for group in consumer.groups] == [2, 2, 1]


def test_store_round_trip(write_xyz, tmp_path):
    path = write_xyz(lines(5), name="site.xyz")
    store = PointGroupStore(tmp_path / "store")
    consumer = PolyDataGeometryConsumer(store=store)

    PointCloudIngestor(IngestionConfig(batch_capacity=2), consumer).ingest(path)

    assert store.has("site")
    assert store.mesh_path("site", 2).is_file()
    groups = store.load("site")
    assert [group.n_points for group in groups] == [2, 2, 1]
    np.testing.assert_allclose(groups[1].points, consumer.groups[1].points)


def test_store_missing_dataset(tmp_path):
    store = PointGroupStore(tmp_path)

    assert not store.has("site")
    with pytest.raises(PointGroupStoreError):
        store.load("site")


def test_scene_loader_reuses_stored_groups(write_xyz, tmp_path):
    path = write_xyz(lines(5), name="site.xyz")
    store = PointGroupStore(tmp_path / "store")
    config = IngestionConfig(batch_capacity=2)

    first = PointCloudSceneLoader(config, store).load(path)
    path.write_text("not,a,point\n")
    second = PointCloudSceneLoader(config, store).load(path)

    assert not first.from_store
    assert first.result.completed
    assert second.from_store
    assert second.num_points == 5


def test_scene_loader_force_reload(write_xyz, tmp_path):
    path = write_xyz(lines(5), name="site.xyz")
    store = PointGroupStore(tmp_path / "store")
    PointCloudSceneLoader(IngestionConfig(batch_capacity=2), store).load(path)

    path.write_text("\n".join(lines(3)) + "\n")
    reloaded = PointCloudSceneLoader(IngestionConfig(batch_capacity=2, force_reload=True), store).load(path)

    assert not reloaded.from_store
    assert reloaded.num_points == 3
    assert not store.mesh_path("site", 2).exists()
    assert len(store.load("site")) == 2


def test_scene_loader_relocated_groups(write_xyz, tmp_path):
    path = write_xyz(["5,5,5,0,0,0", "6,7,8,0,0,0"], name="site.xyz")
    store = PointGroupStore(tmp_path / "store")

    cloud = PointCloudSceneLoader(IngestionConfig(relocate_to_origin=True), store).load(path)

    np.testing.assert_allclose(cloud.groups[0].points, [[0, 0, 0], [1, 2, 3]])
