"""Tests for the document aggregation query against a real (SQLite) database."""

from datetime import date

import pytest

from app.aggregation import DocumentAggregator, build_params


def aggregate(db, terms, **kwargs):
    return DocumentAggregator(customer_marker="documents to search").aggregate(db, build_params(terms, **kwargs))


class TestBuckets:
    def test_month_scenario_is_zero_filled(self, db, add_documents) -> None:
        add_documents(
            {"document_date": "2024-01-05", "text": "Annual audit findings"},
            {"document_date": "2024-03-10", "text": "Follow-up AUDIT memo"},
            {"document_date": "2024-02-10", "text": "Unrelated budget note"},
        )
        result = aggregate(db, ["audit"], granularity="month")
        assert result["buckets"] == [
            {"bucket_date": "2024-01-01", "count": 1},
            {"bucket_date": "2024-02-01", "count": 0},
            {"bucket_date": "2024-03-01", "count": 1},
        ]
        assert result["documents"] is None

    def test_no_match_returns_empty_series(self, db, add_documents) -> None:
        add_documents({"document_date": "2024-01-05", "text": "nothing relevant"})
        assert aggregate(db, ["audit"]) == {"buckets": [], "documents": None}

    def test_date_is_not_shifted(self, db, add_documents) -> None:
        add_documents({"document_date": "2024-03-15", "text": "audit"})
        assert aggregate(db, ["audit"], granularity="day")["buckets"] == [{"bucket_date": "2024-03-15", "count": 1}]
        assert aggregate(db, ["audit"], granularity="month")["buckets"] == [{"bucket_date": "2024-03-01", "count": 1}]
        assert aggregate(db, ["audit"], granularity="year")["buckets"] == [{"bucket_date": "2024-01-01", "count": 1}]

    def test_terms_are_ored_without_double_counting(self, db, add_documents) -> None:
        add_documents(
            {"document_date": "2024-01-01", "text": "audit and compliance"},
            {"document_date": "2024-01-02", "text": "compliance only"},
            {"document_date": "2024-01-04", "text": "audit only"},
            {"document_date": "2024-01-04", "text": "neither"},
        )
        buckets = aggregate(db, ["audit", "compliance"])["buckets"]
        assert [b["bucket_date"] for b in buckets] == ["2024-01-01", "2024-01-02", "2024-01-03", "2024-01-04"]
        assert [b["count"] for b in buckets] == [1, 1, 0, 1]
        assert sum(b["count"] for b in buckets) == 3

    def test_title_only_matches_with_text_or_title(self, db, add_documents) -> None:
        add_documents({"document_date": "2024-01-01", "title": "Audit plan", "text": "body"})
        assert aggregate(db, ["audit"])["buckets"] == []
        assert aggregate(db, ["audit"], match_field="text_or_title")["buckets"] == [
            {"bucket_date": "2024-01-01", "count": 1}
        ]

    def test_like_wildcards_match_literally(self, db, add_documents) -> None:
        add_documents(
            {"document_date": "2024-01-01", "text": "growth of 100% this year"},
            {"document_date": "2024-01-02", "text": "growth of 1000 units"},
        )
        buckets = aggregate(db, ["100%"])["buckets"]
        assert buckets == [{"bucket_date": "2024-01-01", "count": 1}]

    def test_buckets_ignore_date_range(self, db, add_documents) -> None:
        add_documents(
            {"document_date": "2024-01-01", "text": "audit"},
            {"document_date": "2024-01-03", "text": "audit"},
        )
        result = aggregate(db, ["audit"], start_date="2024-01-03", end_date="2024-01-03")
        assert len(result["buckets"]) == 3
        assert len(result["documents"]) == 1

    def test_idempotent(self, db, add_documents) -> None:
        add_documents(
            {"document_date": "2024-01-01", "text": "audit"},
            {"document_date": "2024-05-03", "text": "audit"},
        )
        assert aggregate(db, ["audit"], granularity="month") == aggregate(db, ["audit"], granularity="month")


class TestDocuments:
    def test_range_is_inclusive_and_ordered_by_date_then_id(self, db, add_documents) -> None:
        docs = add_documents(
            {"document_date": "2024-01-31", "text": "audit late"},
            {"document_date": "2024-01-01", "text": "audit first"},
            {"document_date": "2024-01-15", "text": "audit mid b"},
            {"document_date": "2024-01-15", "text": "audit mid a"},
            {"document_date": "2024-02-01", "text": "audit outside"},
        )
        result = aggregate(db, ["audit"], start_date="2024-01-01", end_date="2024-01-31")
        ids = [d["id"] for d in result["documents"]]
        assert ids == [docs[1].id, docs[2].id, docs[3].id, docs[0].id]

    def test_display_projection(self, db, add_documents) -> None:
        add_documents(
            {
                "document_date": "2024-01-01",
                "title": "Q1 review",
                "text": "audit",
                "folder_path": "/Shared/Documents to search/Acme/Reports",
                "file_link": "sites/acme/q1.pdf",
            }
        )
        doc = aggregate(db, ["audit"], start_date="2024-01-01", end_date="2024-01-01")["documents"][0]
        assert doc["title"] == "Q1 review"
        assert doc["text"] == "audit"
        assert doc["document_date"] == date(2024, 1, 1)
        assert doc["customer"] == "Acme/Reports"
        assert doc["file_link"] == "sites/acme/q1.pdf"
        assert "scores" not in doc

    def test_export_projection_scores_each_term(self, db, add_documents) -> None:
        add_documents(
            {
                "document_date": "2024-01-01",
                "title": "Audit report",
                "text": "Audit the audit log. AUDIT! Some risk.",
            },
            {"document_date": "2024-01-02", "title": None, "text": "risk register"},
        )
        rows = aggregate(db, ["audit", "risk"], export=True)["documents"]
        assert [r["document_date"] for r in rows] == [date(2024, 1, 1), date(2024, 1, 2)]
        assert rows[0]["scores"] == {"audit": 4, "risk": 1}
        assert rows[1]["scores"] == {"audit": 0, "risk": 1}
        assert "text" not in rows[0]

    def test_export_respects_range(self, db, add_documents) -> None:
        add_documents(
            {"document_date": "2024-01-01", "text": "audit"},
            {"document_date": "2024-06-01", "text": "audit"},
        )
        rows = aggregate(db, ["audit"], export=True, start_date="2024-06-01", end_date="2024-06-30")["documents"]
        assert len(rows) == 1
        assert rows[0]["document_date"] == date(2024, 6, 1)


class TestStoreErrors:
    def test_database_failure_becomes_store_error(self, db, engine) -> None:
        from app.core.errors import StoreError
        from app.models import Base

        Base.metadata.drop_all(bind=engine)
        with pytest.raises(StoreError, match="Failed to fetch documents"):
            aggregate(db, ["audit"])
        Base.metadata.create_all(bind=engine)
