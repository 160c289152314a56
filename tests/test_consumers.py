from __future__ import annotations

from docxref.core.consumers import FragmentCollector


def test_collector_tracks_index_and_deliveries() -> None:
    collector = FragmentCollector()
    collector({"libA": [1, 2]})
    collector({"libB": [3], "libA": [4]})

    assert collector.deliveries == [{"libA": [1, 2]}, {"libB": [3], "libA": [4]}]
    assert collector.index == {"libA": [4], "libB": [3]}
    assert collector.namespaces() == ["libA", "libB"]
    assert collector.total_records() == 2


def test_empty_collector() -> None:
    collector = FragmentCollector()
    assert collector.total_records() == 0
    assert collector.namespaces() == []
