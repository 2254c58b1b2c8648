import pandas as pd

from polo_collector.output import SERP_LINK_COLUMNS, summarize_serp_links, write_csv
from polo_collector.serp_client import SERP_COLUMNS


def serp_row(query, link, position, country="SA", language="lang_en"):
    return {"query": query, "country": country, "language": language, "link": link,
            "title": f"title {link}", "position": position}


def test_write_csv_header_only_for_no_rows(tmp_path):
    path = write_csv([], tmp_path / "nested" / "serp.csv", SERP_COLUMNS)
    assert path.read_text(encoding="utf-8").strip() == ",".join(SERP_COLUMNS)


def test_write_csv_keeps_column_order(tmp_path):
    path = write_csv([{"b": 2, "a": 1}], tmp_path / "out.csv", ["a", "b"])
    df = pd.read_csv(path)
    assert list(df.columns) == ["a", "b"]
    assert df.iloc[0].tolist() == [1, 2]


def test_summarize_serp_links():
    rows = [
        serp_row("q1", "https://a", 3),
        serp_row("q2", "https://a", 1),
        serp_row("q2", "https://a", 5),
        serp_row("q1", "https://b", None),
        serp_row("q1", "https://a", 2, country="HK"),
        serp_row("q1", "", 4),
    ]
    df = summarize_serp_links(rows)
    assert list(df.columns) == SERP_LINK_COLUMNS
    assert len(df) == 3

    a_sa = df[(df["link"] == "https://a") & (df["country"] == "SA")].iloc[0]
    assert a_sa["best_position"] == 1
    assert a_sa["n_queries"] == 2
    assert a_sa["queries"] == "q1; q2"


def test_summarize_serp_links_empty():
    assert summarize_serp_links([]).empty
    assert list(summarize_serp_links([]).columns) == SERP_LINK_COLUMNS
