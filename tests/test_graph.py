"""Tests for the LangGraph submission pipeline."""

from difficulty_estimation_client.errors import DomainFailure, TransportFailure
from difficulty_estimation_client.graph import build_request_graph, build_resolution_graph


class TestRequestGraph:
    def test_builds_payload_and_calls_transport(self, fake_transport, marathon_response):
        transport = fake_transport(response=marathon_response)
        app = build_request_graph(transport).compile()
        out = app.invoke({"experience": "마라톤 완주", "request_field": "experience", "trace": []})

        assert transport.calls == [{"experience": "마라톤 완주"}]
        assert out["payload"] == {"experience": "마라톤 완주"}
        assert out["raw_response"] == marathon_response
        assert out.get("failure") is None
        assert out["trace"] == ["ingestion", "request"]

    def test_default_field_is_text(self, fake_transport):
        transport = fake_transport(response={})
        app = build_request_graph(transport).compile()
        app.invoke({"experience": "마라톤 완주", "trace": []})
        assert transport.calls == [{"text": "마라톤 완주"}]

    def test_transport_exception_is_captured(self, fake_transport):
        transport = fake_transport(error=ValueError("bad gateway"))
        app = build_request_graph(transport).compile()
        out = app.invoke({"experience": "x", "trace": []})

        failure = out["failure"]
        assert isinstance(failure, TransportFailure)
        assert failure.message == "bad gateway"
        assert isinstance(failure.details, ValueError)


class TestResolutionGraph:
    def test_ok_route_builds_presentation(self, marathon_response):
        app = build_resolution_graph().compile()
        out = app.invoke({"raw_response": marathon_response, "trace": []})

        assert out["trace"] == ["normalizer", "presentation"]
        assert out["result"].level == "5"
        assert set(out["presentation_payload"]) == {"summary", "chart", "table"}

    def test_err_route_skips_presentation(self):
        app = build_resolution_graph().compile()
        out = app.invoke({"raw_response": {"error": "no match"}, "trace": []})

        assert out["trace"] == ["normalizer"]
        assert out["result"] is None
        assert isinstance(out["failure"], DomainFailure)
        assert "presentation_payload" not in out
