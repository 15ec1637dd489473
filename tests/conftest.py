"""
Shared fixtures: an Order schema and sample documents written to tmp_path.
"""

from pathlib import Path

import pytest

from xsdguard.config.settings import set_config
from xsdguard.schema.cache import reset_schema_cache
from xsdguard.schema.compiler import load_schema

from samples import (
    EXTRA_AMOUNT_ORDER,
    INCLUDED_TYPES_XSD,
    INCLUDING_XSD,
    MALFORMED_ORDER,
    MALFORMED_XSD,
    MISSING_AMOUNT_ORDER,
    ORDER_XSD,
    UNRESOLVABLE_XSD,
    VALID_ORDER,
    WRONG_ROOT,
    WRONG_TYPE_ORDER,
)


@pytest.fixture(autouse=True)
def _reset_globals():
    """Each test starts with environment config and an empty schema cache."""
    set_config(None)
    reset_schema_cache()
    yield
    set_config(None)
    reset_schema_cache()


def _write(path: Path, content: str) -> Path:
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def order_xsd(tmp_path) -> Path:
    return _write(tmp_path / "order.xsd", ORDER_XSD)


@pytest.fixture
def order_schema(order_xsd):
    return load_schema(order_xsd)


@pytest.fixture
def unresolvable_xsd(tmp_path) -> Path:
    return _write(tmp_path / "unresolvable.xsd", UNRESOLVABLE_XSD)


@pytest.fixture
def malformed_xsd(tmp_path) -> Path:
    return _write(tmp_path / "malformed.xsd", MALFORMED_XSD)


@pytest.fixture
def payment_xsd(tmp_path) -> Path:
    _write(tmp_path / "types.xsd", INCLUDED_TYPES_XSD)
    return _write(tmp_path / "payment.xsd", INCLUDING_XSD)


@pytest.fixture
def xml_files(tmp_path):
    """Sample documents on disk, keyed by name."""
    docs = tmp_path / "docs"
    docs.mkdir()
    return {
        "valid": _write(docs / "valid.xml", VALID_ORDER),
        "wrong_type": _write(docs / "wrong_type.xml", WRONG_TYPE_ORDER),
        "malformed": _write(docs / "malformed.xml", MALFORMED_ORDER),
        "extra_amount": _write(docs / "extra_amount.xml", EXTRA_AMOUNT_ORDER),
        "missing_amount": _write(docs / "missing_amount.xml", MISSING_AMOUNT_ORDER),
        "wrong_root": _write(docs / "wrong_root.xml", WRONG_ROOT),
    }
