"""Тестирование сборки модели акта"""

import asyncio
from decimal import Decimal

import pytest

from conftest import FakeLookups
from infobuh_docs.application.services.act_assembler import ActAssembler
from infobuh_docs.application.validation.act_validator import validate_act_input
from infobuh_docs.domain.exceptions import AmountTooLargeError, ResolutionError
from infobuh_docs.shared.exceptions import ConfigurationError


def _assemble(payload, lookups, assembler=None):
    act = validate_act_input(payload).unwrap()
    return asyncio.run((assembler or ActAssembler()).assemble(act, lookups))


class TestAssemble:
    """Сборка модели из проверенных данных"""

    def test_single_item_example(self, payload, fake_lookups):
        document = _assemble(payload, fake_lookups)

        assert document.total == Decimal("3000")
        assert document.total_in_words == "Три тысячи тенге 00 тиын"
        assert len(document.lines) == 1
        line = document.lines[0]
        assert line.position == 1
        assert line.description == "Consulting"
        assert line.amount == Decimal("3000")
        assert document.seller.name == "ТОО Альфа"
        assert document.client.bin == "210987654321"
        assert document.executor is None
        assert document.customer is None
        assert not document.has_signatures

    def test_lines_keep_input_order(self, payload, fake_lookups):
        payload["items"] = [
            {"description": "Audit", "quantity": 1, "unit": "шт", "price": 100},
            {"description": "Consulting", "quantity": 2.5, "unit": "hr", "price": 40},
            {"description": "Support", "quantity": 3, "unit": "мес", "price": 0.1},
        ]

        document = _assemble(payload, fake_lookups)

        assert [line.position for line in document.lines] == [1, 2, 3]
        assert [line.description for line in document.lines] == ["Audit", "Consulting", "Support"]
        assert document.total == Decimal("200.3")
        assert document.total == sum(line.amount for line in document.lines)

    def test_total_does_not_depend_on_order(self, payload, fake_lookups):
        items = [
            {"description": "A", "quantity": 0.3, "unit": "шт", "price": 0.1},
            {"description": "B", "quantity": 7, "unit": "шт", "price": 1234.56},
            {"description": "C", "quantity": 1, "unit": "шт", "price": 0.2},
        ]
        payload["items"] = items
        forward = _assemble(payload, fake_lookups)
        payload["items"] = list(reversed(items))
        backward = _assemble(payload, fake_lookups)

        assert forward.total == backward.total == Decimal("8642.15")

    def test_long_mantissas_are_exact(self, payload, fake_lookups):
        payload["items"] = [
            {"description": "A", "quantity": Decimal("1.234567890123456"), "unit": "шт",
             "price": Decimal("12345678901234.56")},
        ]

        document = _assemble(payload, fake_lookups)

        assert document.lines[0].amount == Decimal(f"{1234567890123456 ** 2}E-17")
        assert document.total == document.lines[0].amount

    def test_wide_magnitudes_in_any_order(self, payload, fake_lookups):
        items = [
            {"description": "A", "quantity": 1e27, "unit": "шт", "price": 1},
            {"description": "B", "quantity": 0.4, "unit": "шт", "price": 1},
            {"description": "C", "quantity": 0.4, "unit": "шт", "price": 1},
        ]
        totals = set()
        for order in (items, items[::-1], [items[1], items[0], items[2]]):
            payload["items"] = order
            document = _assemble(payload, fake_lookups)
            totals.add(document.total)

        assert totals == {Decimal("1000000000000000000000000000.8")}
        assert document.total_in_words == "Один октиллион тенге 80 тиын"

    def test_quadrillion_total(self, payload, fake_lookups):
        payload["items"] = [{"description": "A", "quantity": 1e15, "unit": "шт", "price": 1}]

        document = _assemble(payload, fake_lookups)

        assert document.total_in_words == "Один квадриллион тенге 00 тиын"

    def test_total_too_large_for_words(self, payload, fake_lookups):
        payload["items"] = [{"description": "A", "quantity": 1e18, "unit": "шт", "price": 1e18}]

        with pytest.raises(AmountTooLargeError) as exc_info:
            _assemble(payload, fake_lookups)

        assert exc_info.value.details["total"] == "1E+36"


    def test_signatories(self, payload, fake_lookups):
        payload["executorEmployeeId"] = "E1"
        payload["customerEmployeeId"] = "E2"

        document = _assemble(payload, fake_lookups)

        assert document.has_signatures
        assert document.executor.full_name == "Иванов И. И."
        assert document.customer.role == "Бухгалтер"

    def test_only_one_signatory(self, payload, fake_lookups):
        payload["customerEmployeeId"] = "E2"

        document = _assemble(payload, fake_lookups)

        assert document.has_signatures
        assert document.executor is None
        assert document.customer is not None

    def test_employees_not_requested_when_absent(self, payload, fake_lookups):
        _assemble(payload, fake_lookups)

        assert sorted(fake_lookups.requested) == ["C1", "S1", "bank:S1"]


class TestVatAndBank:
    """НДС "в том числе" и реквизиты исполнителя"""

    def test_vat_per_line_and_total(self, payload, fake_lookups):
        payload["items"] = [
            {"description": "A", "quantity": 1, "unit": "шт", "price": 0.3},
            {"description": "B", "quantity": 2, "unit": "шт", "price": 1500},
        ]

        document = _assemble(payload, fake_lookups)

        assert [line.vat for line in document.lines] == [Decimal("0.04"), Decimal("360.00")]
        assert document.vat_total == Decimal("360.04")

    def test_vat_total_is_rounded_from_total(self, payload, fake_lookups):
        payload["items"] = [
            {"description": "A", "quantity": 1, "unit": "шт", "price": 0.2},
            {"description": "B", "quantity": 1, "unit": "шт", "price": 0.2},
        ]

        document = _assemble(payload, fake_lookups)

        assert [line.vat for line in document.lines] == [Decimal("0.02"), Decimal("0.02")]
        assert document.vat_total == Decimal("0.05")

    def test_custom_vat_rate(self, payload, fake_lookups):
        document = _assemble(payload, fake_lookups, ActAssembler(vat_rate="0"))

        assert document.vat_total == Decimal("0")

    def test_seller_bank_and_kbe(self, payload, fake_lookups):
        document = _assemble(payload, fake_lookups)

        assert document.seller_bank.name == "АО Халык Банк"
        assert document.seller_bank.bik == "HSBKKZKX"
        assert document.seller_bank.account == "KZ123456789012345678"
        assert document.seller.kbe == "17"
        assert document.client.kbe == ""

    def test_seller_without_bank(self, payload):
        document = _assemble(payload, FakeLookups(banks={}))

        assert document.seller_bank is None
        assert document.total == Decimal("3000")

    @pytest.mark.parametrize("kwargs", [{"currency": "GBP"}, {"vat_rate": "-0.12"}])
    def test_invalid_settings(self, kwargs):
        with pytest.raises(ConfigurationError):
            ActAssembler(**kwargs)


class TestResolution:
    """Отсутствующие ссылки"""

    def test_missing_seller(self, payload, fake_lookups):
        payload["sellerLegalEntityId"] = "S-missing"

        with pytest.raises(ResolutionError) as exc_info:
            _assemble(payload, fake_lookups)

        error = exc_info.value
        assert error.field == "sellerLegalEntityId"
        assert error.entity_id == "S-missing"
        assert error.required is True

    def test_missing_client(self, payload, fake_lookups):
        payload["clientLegalEntityId"] = "C-missing"

        with pytest.raises(ResolutionError) as exc_info:
            _assemble(payload, fake_lookups)

        assert exc_info.value.field == "clientLegalEntityId"
        assert exc_info.value.required is True

    def test_seller_reported_first(self, payload, fake_lookups):
        payload["sellerLegalEntityId"] = "S-missing"
        payload["clientLegalEntityId"] = "C-missing"

        with pytest.raises(ResolutionError) as exc_info:
            _assemble(payload, fake_lookups)

        assert exc_info.value.field == "sellerLegalEntityId"

    def test_missing_optional_employee(self, payload, fake_lookups):
        payload["executorEmployeeId"] = "E-missing"

        with pytest.raises(ResolutionError) as exc_info:
            _assemble(payload, fake_lookups)

        error = exc_info.value
        assert error.field == "executorEmployeeId"
        assert error.required is False
        assert error.details["entity_kind"] == "employee"

    def test_seller_missing_from_empty_directory(self, payload):
        with pytest.raises(ResolutionError):
            _assemble(payload, FakeLookups(legal_entities={}))
