# tests/test_importer.py
import json

from course_player.importer import document_format, read_course_document

DOC = [{
    "id": 1, "title": "Intro", "content": "Hello",
    "questions": [{"q_text": "Pick b", "options": ["a", "b"], "correct_index": 1}],
}]


def test_read_json_document(tmp_path):
    f = tmp_path / "course.json"
    f.write_text(json.dumps(DOC), encoding="utf-8")
    course = read_course_document(f)
    assert course.chapters[0].title == "Intro"
    assert course.chapters[0].questions[0].options == ["a", "b"]


def test_read_json_with_bom(tmp_path):
    f = tmp_path / "course.json"
    f.write_bytes(b"\xef\xbb\xbf" + json.dumps(DOC).encode("utf-8"))
    assert len(read_course_document(f).chapters) == 1


def test_yaml_matches_json(tmp_path):
    json_file = tmp_path / "course.json"
    json_file.write_text(json.dumps(DOC))
    yaml_file = tmp_path / "course.yml"
    yaml_file.write_text(
        "- id: 1\n"
        "  title: Intro\n"
        "  content: Hello\n"
        "  questions:\n"
        "    - q_text: Pick b\n"
        "      options: [a, b]\n"
        "      correct_index: 1\n"
    )
    assert read_course_document(yaml_file) == read_course_document(json_file)


def test_missing_file_returns_empty_course(tmp_path):
    assert read_course_document(tmp_path / "nope.json").is_empty


def test_unknown_suffix_parsed_as_json(tmp_path):
    f = tmp_path / "course.txt"
    f.write_text(json.dumps(DOC))
    assert len(read_course_document(f).chapters) == 1


def test_document_format():
    assert document_format("a.yaml") == "yaml"
    assert document_format("a.YML") == "yaml"
    assert document_format("a.json") == "json"


def test_bundled_sample_course():
    from pathlib import Path
    sample = Path(__file__).resolve().parents[1] / "data" / "course_source.json"
    course = read_course_document(sample)
    assert len(course.chapters) == 3
    assert course.chapters[-1].questions == []
