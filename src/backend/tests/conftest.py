"""Shared test fixtures and configuration."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from mergexml.config import CONFIG_PATH_ENV, ENV_OVERRIDES
from mergexml.telemetry import tracing


PAYMENT_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<Payment>
    <Header>
        <DocNum>{number}</DocNum>
    </Header>
    <Amount>
        <Sum>1500.00</Sum>
        <CurrCode>{code}</CurrCode>
    </Amount>
</Payment>
"""


@pytest.fixture(autouse=True)
def isolated_env():
    """Remove MERGEXML_* variables so tests never see the host configuration."""
    names = [CONFIG_PATH_ENV, *ENV_OVERRIDES]

    original_values = {}
    for name in names:
        original_values[name] = os.environ.pop(name, None)

    yield

    for name, original_value in original_values.items():
        if original_value is None:
            os.environ.pop(name, None)
        else:
            os.environ[name] = original_value


@pytest.fixture(autouse=True)
def reset_telemetry():
    """Drop tracers cached by setup_telemetry() between tests."""
    yield
    tracing._TRACER_INSTANCE = None
    tracing._TELEMETRY_INITIALIZED = False


@pytest.fixture
def make_document(tmp_path):
    """Factory writing a payment document with the given currency code."""
    def _make(name: str = "payment.xml", code: str = "840", content: str = None) -> Path:
        path = tmp_path / name
        if content is None:
            content = PAYMENT_TEMPLATE.format(number=path.stem, code=code)
        path.write_text(content, encoding="utf-8")
        return path

    return _make


@pytest.fixture
def make_input_dir(tmp_path):
    """Factory filling a directory with xml, xsd and unrelated files."""
    def _make(xml: int = 0, xsd: int = 0, other: int = 0, code: str = "840", name: str = "input") -> Path:
        directory = tmp_path / name
        directory.mkdir()
        for i in range(xml):
            (directory / f"payment_{i:02d}.xml").write_text(
                PAYMENT_TEMPLATE.format(number=i, code=code), encoding="utf-8"
            )
        for i in range(xsd):
            (directory / f"schema_{i}.xsd").write_text(
                '<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema"/>', encoding="utf-8"
            )
        for i in range(other):
            (directory / f"notes_{i}.txt").write_text("not xml", encoding="utf-8")
        return directory

    return _make


@pytest.fixture
def span_exporter():
    """Route @loggable spans to an in-memory exporter."""
    exporter = InMemorySpanExporter()
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(exporter))

    with patch('mergexml.telemetry.tracing.get_tracer', return_value=provider.get_tracer("test")):
        yield exporter

    provider.shutdown()
