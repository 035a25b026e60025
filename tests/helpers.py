"""Test helpers: Hypothesis strategies for Results.

Keep this file tiny and purpose-built.
"""

from __future__ import annotations

from typing import Any

from hypothesis import strategies as st

from extresult import Result, failure, initial, pending, success

#: Payloads that compare equal to themselves (no NaN).
payloads = st.one_of(
    st.integers(),
    st.text(max_size=8),
    st.tuples(st.integers(), st.booleans()),
)


def results(values: st.SearchStrategy[Any] = payloads) -> st.SearchStrategy[Result[Any, Any]]:
    """Any of the four states, with arbitrary payloads."""
    return st.one_of(
        st.just(initial),
        st.just(pending),
        values.map(failure),
        values.map(success),
    )


def successes(values: st.SearchStrategy[Any] = payloads) -> st.SearchStrategy[Any]:
    return values.map(success)
