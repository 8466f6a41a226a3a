import pytest

from tecdoc.clients.mocks import RecordedTransport
from tecdoc.contracts.interfaces import CanonicalRecord, RawNode
from tecdoc.errors import RequestFailed, TransportFailure, UnexpectedShape
from tecdoc.executor import RequestExecutor


def test_execute_returns_canonical_records(make_response):
    transport = RecordedTransport({"getLanguages": make_response([
        {"languageCode": "lv", "languageName": "Latviešu"},
        {"languageCode": "de", "languageName": "Vācu"},
    ])})
    executor = RequestExecutor(transport, session_params={"provider": 123})

    records = executor.execute("getLanguages", {"lang": "lv"})

    assert isinstance(records, list)
    assert all(isinstance(record, CanonicalRecord) for record in records)
    assert [r["language_code"] for r in records] == ["lv", "de"]


def test_execute_merges_session_params_with_caller_params_winning(make_response):
    transport = RecordedTransport({"getLanguages": make_response([])})
    executor = RequestExecutor(transport, session_params={"provider": 123, "lang": "en"})

    executor.execute("getLanguages", {"lang": "lv"})

    assert transport.calls == [("getLanguages", {"provider": 123, "lang": "lv"})]


def test_execute_issues_exactly_one_call_per_invocation(make_response):
    transport = RecordedTransport({"getLanguages": make_response([{"languageCode": "lv"}])})
    executor = RequestExecutor(transport)

    executor.execute("getLanguages")
    executor.execute("getLanguages")

    assert len(transport.calls) == 2


def test_empty_result_is_an_empty_list():
    transport = RecordedTransport({"getLanguages": RawNode.leaf("data")})

    assert RequestExecutor(transport).execute("getLanguages") == []


def test_transport_failure_is_propagated_unchanged():
    failure = TransportFailure("getLanguages", "connection refused")
    transport = RecordedTransport({"getLanguages": failure})

    with pytest.raises(TransportFailure) as excinfo:
        RequestExecutor(transport).execute("getLanguages")

    assert excinfo.value is failure


def test_other_transport_errors_are_wrapped_with_the_operation():
    cause = ConnectionResetError("peer reset")
    transport = RecordedTransport({"getLanguages": cause})

    with pytest.raises(RequestFailed) as excinfo:
        RequestExecutor(transport).execute("getLanguages")

    assert excinfo.value.operation == "getLanguages"
    assert excinfo.value.cause is cause
    assert excinfo.value.__cause__ is cause
    assert "getLanguages" in str(excinfo.value)


def test_unexpected_shape_names_the_operation(make_node):
    transport = RecordedTransport({"getLanguages": make_node("data", {"languageCode": "lv"})})

    with pytest.raises(UnexpectedShape) as excinfo:
        RequestExecutor(transport).execute("getLanguages")

    assert excinfo.value.operation == "getLanguages"
    assert str(excinfo.value).startswith("getLanguages:")


def test_unknown_operation_on_recorded_transport_fails():
    with pytest.raises(TransportFailure):
        RequestExecutor(RecordedTransport()).execute("getLanguages")


EMPTY_ENVELOPE = """<?xml version="1.0" encoding="UTF-8"?>
<soapenv:Envelope xmlns:soapenv="http://schemas.xmlsoap.org/soap/envelope/">
  <soapenv:Body>
    <ns1:getLanguagesResponse xmlns:ns1="http://server.cat.tecdoc.net">
      <getLanguagesReturn>
        <data>
          %s
        </data>
        <status>200</status>
      </getLanguagesReturn>
    </ns1:getLanguagesResponse>
  </soapenv:Body>
</soapenv:Envelope>"""


@pytest.mark.parametrize("content", ["", "<array>\n          </array>", "<array/>"])
def test_pretty_printed_empty_response_is_an_empty_list(content):
    transport = RecordedTransport({"getLanguages": EMPTY_ENVELOPE % content})

    assert RequestExecutor(transport).execute("getLanguages") == []


def deeply_nested_response(depth):
    node = RawNode.leaf("value", "1")
    for _ in range(depth):
        node = RawNode.branch("level", node)
    return RawNode.branch("data", RawNode.branch("array", RawNode.branch("array", node)))


def test_too_deep_tree_is_an_unexpected_shape_with_the_operation():
    transport = RecordedTransport({"getLanguages": deeply_nested_response(5000)})

    with pytest.raises(UnexpectedShape) as excinfo:
        RequestExecutor(transport).execute("getLanguages")

    assert excinfo.value.operation == "getLanguages"
    assert isinstance(excinfo.value.__cause__, RecursionError)


def test_too_deep_document_fails_as_a_request_failure():
    content = "<data><array><array>" + "<level>" * 3000 + "1" + "</level>" * 3000 + "</array></array></data>"
    transport = RecordedTransport({"getLanguages": content})

    with pytest.raises(RequestFailed) as excinfo:
        RequestExecutor(transport).execute("getLanguages")

    assert excinfo.value.operation == "getLanguages"
