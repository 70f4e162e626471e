import json

import pytest

from ledmesh.scenes import Scene, SceneManager


def test_load_missing_file_gives_no_scenes(tmp_path):
    manager = SceneManager(tmp_path / "scenes.json")
    assert manager.load() == []
    assert manager.scenes == []


def test_save_and_load_round_trip(tmp_path):
    path = tmp_path / "scenes.json"
    manager = SceneManager(path)
    scenes = [Scene(1, "Intro", "CHASE"), Scene(2, "Drop", "PULSE")]
    manager.replace(scenes)
    manager.save()
    other = SceneManager(path)
    assert other.load() == scenes


def test_saved_file_is_array_of_objects(tmp_path):
    path = tmp_path / "scenes.json"
    manager = SceneManager(path)
    manager.replace([Scene(3, "Calm", "AUDIO_REACTIVE")])
    manager.save()
    assert json.loads(path.read_text()) == [
        {"id": 3, "name": "Calm", "effect": "AUDIO_REACTIVE"}
    ]


def test_load_replaces_previous_scenes(tmp_path):
    path = tmp_path / "scenes.json"
    path.write_text('[{"id": 5, "name": "Five", "effect": "CHASE"}]')
    manager = SceneManager(path)
    manager.replace([Scene(1, "Old", "PULSE")])
    manager.load()
    assert [s.id for s in manager.scenes] == [5]


def test_invalid_file_raises_and_clears(tmp_path):
    path = tmp_path / "scenes.json"
    path.write_text("[{oops")
    manager = SceneManager(path)
    manager.replace([Scene(1, "Old", "PULSE")])
    with pytest.raises(ValueError):
        manager.load()
    assert manager.scenes == []


def test_non_array_document_gives_no_scenes(tmp_path):
    path = tmp_path / "scenes.json"
    path.write_text('{"id": 1}')
    assert SceneManager(path).load() == []


def test_missing_fields_use_empty_values(tmp_path):
    path = tmp_path / "scenes.json"
    path.write_text('[{"name": "Nameless"}]')
    assert SceneManager(path).load() == [Scene(0, "Nameless", "")]


def test_replace_accepts_mappings(tmp_path):
    manager = SceneManager(tmp_path / "scenes.json")
    result = manager.replace([{"id": 7, "name": "Seven", "effect": "PULSE"}])
    assert result == [Scene(7, "Seven", "PULSE")]
    assert manager.scenes == result


def test_find_scene(tmp_path):
    manager = SceneManager(tmp_path / "scenes.json")
    manager.replace([Scene(1, "A", "CHASE"), Scene(2, "B", "PULSE")])
    assert manager.find_scene(2) == Scene(2, "B", "PULSE")
    assert manager.find_scene(9) is None


def test_find_scene_returns_first_match(tmp_path):
    manager = SceneManager(tmp_path / "scenes.json")
    manager.replace([Scene(4, "First", "CHASE"), Scene(4, "Second", "PULSE")])
    assert manager.find_scene(4).name == "First"


def test_find_scene_result_is_shared(tmp_path):
    manager = SceneManager(tmp_path / "scenes.json")
    manager.replace([Scene(1, "A", "CHASE")])
    manager.find_scene(1).effect = "PULSE"
    assert manager.scenes[0].effect == "PULSE"