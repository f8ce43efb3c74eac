"""Tests for the project store."""

import json
import threading

import pytest

from core.errors import NoActiveProjectError, NoPathError, ParseError, StoreIOError
from models.element import Character
from models.project import Project
from models.script import NodeType, ScriptGraph, ScriptNode


class TestCreate:
    """Tests for creating projects."""

    def test_create_seeds_default_content(self, store):
        """Test create stores a seeded project with no save path."""
        project = store.create("Demo")

        assert project.name == "Demo"
        assert project.page_count == 1
        assert project.get_episode("s_1", "ep_1") is not None
        assert store.path is None
        assert store.get_current() == project

    def test_create_uses_configured_canvas(self, store):
        store.settings.canvas_width = 800
        store.settings.canvas_height = 600

        project = store.create("Small")
        assert (project.width, project.height) == (800, 600)

    def test_create_clears_previous_path(self, store, tmp_path):
        store.save_as(tmp_path / "a.json", store.create("A"))
        assert store.path is not None

        store.create("B")
        assert store.path is None
        assert store.get_current().name == "B"

    def test_get_current_returns_copy(self, store):
        """Test callers cannot mutate the resident project through a copy."""
        store.create("Demo")
        copy = store.get_current()
        copy.name = "Changed"
        copy.seasons.clear()

        current = store.get_current()
        assert current.name == "Demo"
        assert "s_1" in current.seasons

    def test_empty_store(self, store):
        assert store.get_current() is None
        with pytest.raises(NoActiveProjectError):
            with store.transaction():
                pass


class TestSave:
    """Tests for save and save-as."""

    def test_save_without_path(self, store):
        """Test save before any save-as asks for Save As."""
        project = store.create("Demo")

        with pytest.raises(NoPathError) as exc:
            store.save(project)
        assert "Save As" in str(exc.value)

    def test_save_as_then_save(self, store, tmp_path):
        """Test save reuses the path recorded by save-as."""
        path = tmp_path / "demo.json"
        project = store.create("Demo")
        store.save_as(path, project)

        assert path.exists()
        assert json.loads(path.read_text(encoding="utf-8"))["name"] == "Demo"

        project2 = project.model_copy(update={"name": "Demo 2"})
        message = store.save(project2)

        assert str(path) in message
        assert json.loads(path.read_text(encoding="utf-8"))["name"] == "Demo 2"
        assert store.get_current().name == "Demo 2"

    def test_written_file_is_indented(self, store, tmp_path):
        path = tmp_path / "demo.json"
        store.save_as(path, store.create("Demo"))

        text = path.read_text(encoding="utf-8")
        assert text.startswith("{\n  ")
        assert list(tmp_path.iterdir()) == [path]

    def test_failed_write_keeps_memory_state(self, store, tmp_path):
        """Test a failed write does not roll back the in-memory project."""
        store.create("Old")
        path = tmp_path / "missing-dir" / "demo.json"
        new_project = Project.create("New")

        with pytest.raises(StoreIOError):
            store.save_as(path, new_project)

        assert store.get_current().name == "New"
        assert store.path == path
        assert not path.exists()


class TestLoad:
    """Tests for loading project files."""

    def test_round_trip(self, store, tmp_path):
        """Test save-as then load gives back an equal project."""
        project = Project.create("Round Trip")
        project.characters["c"] = Character(id="c", name="Bob", color="#00ff00", default_sprite="bob.png")
        project.script_graphs["page_1"] = ScriptGraph(
            id="page_1",
            name="Script",
            nodes=[ScriptNode(id="n", node_type=NodeType.MUSIC, x=1.5, y=2.5, data={"track": "theme.ogg"})],
        )
        project.active_page_id = None

        path = tmp_path / "p.json"
        store.save_as(path, project)
        store.create("Something else")

        loaded = store.load(path)

        assert loaded == project
        assert store.path == path
        assert store.get_current() == project

    def test_missing_file(self, store, tmp_path):
        with pytest.raises(StoreIOError):
            store.load(tmp_path / "nope.json")

    def test_invalid_json_keeps_prior_state(self, store, tmp_path):
        """Test a parse failure leaves the resident project untouched."""
        store.create("Keep")
        bad = tmp_path / "bad.json"
        bad.write_text("{not json", encoding="utf-8")

        with pytest.raises(ParseError):
            store.load(bad)

        assert store.get_current().name == "Keep"
        assert store.path is None

    def test_schema_mismatch(self, store, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps({"name": "X", "seasons": {"s": {"name": "no id"}}}), encoding="utf-8")

        with pytest.raises(ParseError):
            store.load(bad)

    def test_non_utf8_file(self, store, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_bytes(b"\xff\xfe\x00garbage")

        with pytest.raises(ParseError):
            store.load(bad)

    def test_load_without_script_graphs(self, store, tmp_path):
        path = tmp_path / "old.json"
        path.write_text(json.dumps({
            "name": "Old",
            "width": 1920,
            "height": 1080,
            "scenes": {},
            "characters": {},
            "activeSceneId": None,
        }), encoding="utf-8")

        project = store.load(path)
        assert project.script_graphs == {}


class TestConcurrency:
    """Tests for serialized access."""

    def test_concurrent_transactions_do_not_lose_updates(self, store):
        store.create("Counter")
        with store.transaction() as project:
            project.width = 0

        def bump():
            for _ in range(200):
                with store.transaction() as project:
                    project.width += 1

        threads = [threading.Thread(target=bump) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert store.get_current().width == 800
