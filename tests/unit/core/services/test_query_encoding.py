"""
Property-based tests for query string assembly.
"""

from urllib.parse import unquote_plus

from hypothesis import given
from hypothesis import strategies as st

from restify.core.services.rest_client import RESTClient

_names = st.text(min_size=1, max_size=10)
_values = st.lists(st.text(max_size=20), min_size=1, max_size=3)


@given(st.dictionaries(_names, _values, min_size=1, max_size=5))
def test_query_string_decodes_to_parameters(parameters: dict[str, list[str]]) -> None:
    client = RESTClient().url("http://localhost:9011/api")
    for name, values in parameters.items():
        client.url_parameter(name, values)

    url = client.build_url()
    base, _, query = url.partition("?")

    assert base == "http://localhost:9011/api"
    decoded = [
        tuple(unquote_plus(part) for part in pair.split("=", 1))
        for pair in query.split("&")
    ]
    assert decoded == [
        (name, value) for name, values in parameters.items() for value in values
    ]
