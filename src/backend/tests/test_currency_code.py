"""Tests for currency code validation."""

from unittest.mock import Mock

import pytest
from lxml import etree

from mergexml.config import ConfigProperties
from mergexml.exceptions import (
    DocumentParseError,
    InvalidCurrencyCodeError,
    MissingCurrencyCodeTagError
)
from mergexml.models import FileEntry
from mergexml.validators import CurrencyCodeValidator, check_currency_code


class TestCheckCurrencyCode:
    """Test the currency code check function."""

    def test_matching_code(self, make_document):
        """Test a matching code passes."""
        document = make_document(code="840")

        assert check_currency_code(document, "840") is True

    def test_mismatching_code(self, make_document):
        """Test a different code raises with the expected value in the message."""
        document = make_document(code="978")

        with pytest.raises(InvalidCurrencyCodeError) as exc_info:
            check_currency_code(document, "840")

        assert "840" in str(exc_info.value)
        assert str(exc_info.value) == "Допустимое значение кода валюты 840"
        assert exc_info.value.expected == "840"
        assert exc_info.value.actual == "978"

    def test_integer_expected_code(self, make_document):
        """Test an integer expected code is compared as text."""
        document = make_document(code="643")

        assert check_currency_code(document, 643) is True

    def test_leading_zeros_are_significant(self, make_document):
        """Test text comparison keeps leading zeros."""
        document = make_document(code="036")

        with pytest.raises(InvalidCurrencyCodeError):
            check_currency_code(document, 36)

    def test_first_element_wins(self, make_document):
        """Test only the first currency code element is checked."""
        document = make_document(content=(
            "<Batch>"
            "<Payment><CurrCode>840</CurrCode></Payment>"
            "<Payment><CurrCode>978</CurrCode></Payment>"
            "</Batch>"
        ))

        assert check_currency_code(document, "840") is True

    def test_nested_text_content(self, make_document):
        """Test the element text includes descendant text."""
        document = make_document(content="<Payment><CurrCode>8<b>4</b>0</CurrCode></Payment>")

        assert check_currency_code(document, "840") is True

    def test_prefixed_element_is_not_matched(self, make_document):
        """Test a prefixed element does not match the unprefixed tag name."""
        document = make_document(content=(
            '<p:Payment xmlns:p="urn:payments"><p:CurrCode>840</p:CurrCode></p:Payment>'
        ))

        with pytest.raises(MissingCurrencyCodeTagError):
            check_currency_code(document, "840")

    def test_unprefixed_element_wins_over_prefixed(self, make_document):
        """Test the first unprefixed element is read even after a prefixed one."""
        document = make_document(content=(
            '<P xmlns:a="urn:a"><a:CurrCode>978</a:CurrCode><CurrCode>840</CurrCode></P>'
        ))

        assert check_currency_code(document, "840") is True

    def test_default_namespace_element(self, make_document):
        """Test unprefixed elements in a default namespace are matched."""
        document = make_document(content=(
            '<Payment xmlns="urn:payments"><CurrCode>840</CurrCode></Payment>'
        ))

        assert check_currency_code(document, "840") is True

    def test_prefixed_tag_name(self, make_document):
        """Test a prefixed tag name matches only that prefix."""
        document = make_document(content=(
            '<P xmlns:a="urn:a" xmlns:b="urn:b"><b:CurrCode>978</b:CurrCode><a:CurrCode>840</a:CurrCode></P>'
        ))

        assert check_currency_code(document, "840", tag="a:CurrCode") is True

    def test_missing_tag(self, make_document):
        """Test a document without the tag raises MissingCurrencyCodeTagError."""
        document = make_document(content="<Payment><Sum>10</Sum></Payment>")

        with pytest.raises(MissingCurrencyCodeTagError) as exc_info:
            check_currency_code(document, "840")

        assert exc_info.value.tag == "CurrCode"
        assert exc_info.value.path == document

    def test_custom_tag(self, make_document):
        """Test a configured tag name is used instead of the default."""
        document = make_document(content="<Payment><Currency>840</Currency></Payment>")

        assert check_currency_code(document, "840", tag="Currency") is True

    def test_malformed_document(self, make_document):
        """Test a broken document raises DocumentParseError."""
        document = make_document(content="<Payment><CurrCode>840</Payment>")

        with pytest.raises(DocumentParseError) as exc_info:
            check_currency_code(document, "840")

        assert isinstance(exc_info.value.__cause__, etree.XMLSyntaxError)

    def test_accepts_file_entry(self, make_document):
        """Test a FileEntry is accepted as the file."""
        entry = FileEntry.from_path(make_document(code="840"))

        assert check_currency_code(entry, "840") is True

    def test_custom_parser(self, tmp_path):
        """Test the parser collaborator can be replaced."""
        parsed = etree.ElementTree(etree.fromstring("<Payment><CurrCode>840</CurrCode></Payment>"))
        parser = Mock(return_value=parsed)

        assert check_currency_code(tmp_path / "virtual.xml", "840", parser=parser) is True
        parser.assert_called_once_with(tmp_path / "virtual.xml")

    def test_check_is_idempotent(self, make_document):
        """Test repeated checks give the same outcome."""
        good = make_document(name="good.xml", code="840")
        bad = make_document(name="bad.xml", code="978")

        assert check_currency_code(good, "840") is True
        assert check_currency_code(good, "840") is True

        for _ in range(2):
            with pytest.raises(InvalidCurrencyCodeError):
                check_currency_code(bad, "840")


class TestCurrencyCodeValidator:
    """Test the configured validator object."""

    def test_validator_uses_config(self, make_document):
        """Test the expected code and tag come from configuration."""
        validator = CurrencyCodeValidator(ConfigProperties(currency_code=840))

        assert validator.expected_code == "840"
        assert validator.tag == "CurrCode"
        assert validator.validate(make_document(code="840")) is True

    def test_validator_as_predicate(self, make_document):
        """Test the validator can be used as a predicate."""
        validator = CurrencyCodeValidator(ConfigProperties(currency_code="978"))
        files = [make_document(name="a.xml", code="978"), make_document(name="b.xml", code="978")]

        assert all(validator(f) for f in files)

    def test_validator_rejects_mismatch(self, make_document):
        """Test a mismatch propagates from the validator."""
        validator = CurrencyCodeValidator(ConfigProperties(currency_code=643))

        with pytest.raises(InvalidCurrencyCodeError) as exc_info:
            validator(make_document(code="840"))

        assert "643" in str(exc_info.value)
