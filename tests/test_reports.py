from xml.etree import ElementTree

from newest_check.checker.types import Item
from newest_check.services.reports import read_csv, render_junit, write_csv, write_junit


def test_csv_round_trip(tmp_path):
    records = [
        Item(id="41", title='Show HN: "quoted", with comma', url="https://example.com/a?b=1,2", timestamp_seconds=1_704_067_200),
        Item(id="40", title="Plain", url="item?id=40", timestamp_seconds=1_704_067_199),
    ]
    path = tmp_path / "artifacts" / "top100.csv"

    write_csv(records, str(path))
    rows = read_csv(str(path))

    assert list(rows[0].keys()) == ["index", "iso_time", "title", "url", "id"]
    assert [(row["index"], row["id"], row["title"], row["iso_time"]) for row in rows] == [
        ("0", "41", 'Show HN: "quoted", with comma', "2024-01-01T00:00:00.000Z"),
        ("1", "40", "Plain", "2023-12-31T23:59:59.000Z"),
    ]
    assert rows[0]["url"] == "https://example.com/a?b=1,2"


def test_junit_pass(tmp_path):
    path = write_junit(True, "", str(tmp_path / "results.xml"))

    suite = ElementTree.parse(path).getroot()

    assert suite.tag == "testsuite"
    assert suite.get("tests") == "1"
    assert suite.get("failures") == "0"
    case = suite.find("testcase")
    assert case.get("name") == "first-100-sorted"
    assert case.find("failure") is None


def test_junit_failure_carries_message():
    message = "break at index 3\nA: <a> & ]]> b  2024\nB: c  2023"

    suite = ElementTree.fromstring(render_junit(False, message))

    assert suite.get("failures") == "1"
    failure = suite.find("testcase/failure")
    assert failure.get("message") == "Order check failed"
    assert failure.text == message
    assert "<![CDATA[" in render_junit(False, message)
