import json

import pytest

from ytsearch import cli


@pytest.fixture(autouse=True)
def quiet_env(monkeypatch):
    monkeypatch.delenv("YTSEARCH_LOG_LEVEL", raising=False)


def test_json_output(pages, serve, capsys):
    serve(pages.sectioned([pages.video("a"), pages.video("b")]))

    assert cli.main(["cats", "--limit", "1", "--format", "json"]) == 0

    output = json.loads(capsys.readouterr().out)
    assert [item["id"] for item in output["items"]] == ["a"]


def test_table_output(pages, serve, capsys):
    serve(pages.sectioned([pages.video("a", "A cat video")]))

    assert cli.main(["cats"]) == 0

    assert "A cat video" in capsys.readouterr().out


def test_save_and_resume(pages, serve, tmp_path, capsys):
    serve(
        pages.sectioned([pages.video("a")], token="T2"),
        pages.continuation([pages.video("b")]),
    )
    saved = tmp_path / "continuation.json"

    assert cli.main(["cats", "--pages", "1", "--save-continuation", str(saved)]) == 0
    assert json.loads(saved.read_text())["token"] == "T2"
    capsys.readouterr()

    assert cli.main(["--resume", str(saved), "--format", "csv"]) == 0
    assert capsys.readouterr().out.splitlines()[1].startswith("video,b,")


def test_filters(pages, serve, capsys):
    groups = [pages.filter_group("Type", [pages.filter("Video")])]
    serve(pages.sectioned([], groups=groups))

    assert cli.main(["cats", "--filters"]) == 0

    out = capsys.readouterr().out
    assert "Type" in out
    assert "Video" in out


def test_errors_exit_with_status_one(mocked_responses, capsys):
    assert cli.main(["https://www.youtube.com/results?sp=abc"]) == 1
    assert "ytsearch: error:" in capsys.readouterr().err


def test_query_or_resume_required():
    with pytest.raises(SystemExit):
        cli.main([])
