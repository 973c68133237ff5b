import asyncio
import logging
from decimal import Decimal
from typing import Optional, Union

from ...domain.entities.act import ActInput
from ...domain.entities.document_model import (
    BankDetails,
    DocumentModel,
    DocumentLine,
    PartyDetails,
    Signatory,
)
from ...domain.entities.parties import BankAccount, LegalEntity, Employee
from ...domain.exceptions.document_exceptions import AmountTooLargeError, ResolutionError
from ...domain.interfaces.entity_lookup import IEntityLookup
from ...shared.exceptions.base_exceptions import ConfigurationError
from ...shared.utils.amount_in_words import SUPPORTED_CURRENCIES, amount_to_words
from ...shared.utils.money import exact_sum, percent_of

DEFAULT_VAT_RATE = Decimal("0.12")


class ActAssembler:
    """Собирает модель акта: разрешает ссылки на стороны и считает суммы"""

    def __init__(self, currency: str = "KZT", vat_rate: Union[Decimal, str] = DEFAULT_VAT_RATE):
        if currency not in SUPPORTED_CURRENCIES:
            raise ConfigurationError(
                f"Неподдерживаемая валюта: {currency}",
                details={"currency": currency, "supported": list(SUPPORTED_CURRENCIES)}
            )
        self._currency = currency
        self._vat_rate = Decimal(str(vat_rate))
        if not self._vat_rate.is_finite() or self._vat_rate < 0:
            raise ConfigurationError(f"Некорректная ставка НДС: {vat_rate}")
        self._logger = logging.getLogger(f"app.{self.__class__.__name__}")

    async def assemble(self, act: ActInput, lookups: IEntityLookup) -> DocumentModel:
        """
        Строит DocumentModel из проверенных данных.

        Суммы позиций и итог считаются без округления; НДС ("в том числе")
        округляется до тиын.

        Raises:
            ResolutionError: продавец или заказчик не найден, либо указанный
                сотрудник не найден
            AmountTooLargeError: итог не записывается прописью
        """
        seller, client, executor, customer, bank = await asyncio.gather(
            lookups.get_legal_entity(act.seller_legal_entity_id),
            lookups.get_legal_entity(act.client_legal_entity_id),
            self._get_employee(lookups, act.executor_employee_id),
            self._get_employee(lookups, act.customer_employee_id),
            lookups.get_bank_account(act.seller_legal_entity_id),
        )

        if seller is None:
            raise ResolutionError("sellerLegalEntityId", act.seller_legal_entity_id, "legal_entity", required=True)
        if client is None:
            raise ResolutionError("clientLegalEntityId", act.client_legal_entity_id, "legal_entity", required=True)
        if act.executor_employee_id is not None and executor is None:
            raise ResolutionError("executorEmployeeId", act.executor_employee_id, "employee", required=False)
        if act.customer_employee_id is not None and customer is None:
            raise ResolutionError("customerEmployeeId", act.customer_employee_id, "employee", required=False)

        lines = tuple(
            DocumentLine(
                position=index,
                description=item.description,
                quantity=item.quantity,
                unit=item.unit,
                price=item.price,
                amount=item.amount,
                vat=percent_of(item.amount, self._vat_rate),
            )
            for index, item in enumerate(act.items, start=1)
        )
        total = exact_sum(line.amount for line in lines)

        try:
            total_in_words = amount_to_words(total, self._currency)
        except ValueError as e:
            raise AmountTooLargeError(total) from e

        self._logger.debug(
            f"Акт {act.act_number}: позиций {len(lines)}, итого {total}, "
            f"продавец {seller.id}, заказчик {client.id}"
        )

        return DocumentModel(
            act_number=act.act_number,
            act_date=act.act_date,
            contract_number=act.contract_number,
            contract_date=act.contract_date,
            date_of_completion=act.date_of_completion,
            seller=self._party(seller, with_kbe=True),
            client=self._party(client),
            lines=lines,
            total=total,
            total_in_words=total_in_words,
            vat_total=percent_of(total, self._vat_rate),
            currency=self._currency,
            seller_bank=self._bank(bank),
            executor=self._signatory(executor),
            customer=self._signatory(customer),
        )

    @staticmethod
    async def _get_employee(lookups: IEntityLookup, employee_id: Optional[str]) -> Optional[Employee]:
        if employee_id is None:
            return None
        return await lookups.get_employee(employee_id)

    @staticmethod
    def _party(entity: LegalEntity, with_kbe: bool = False) -> PartyDetails:
        return PartyDetails(
            name=entity.name,
            bin=entity.bin,
            address=entity.address,
            kbe=entity.ugd if with_kbe else "",
        )

    @staticmethod
    def _bank(account: Optional[BankAccount]) -> Optional[BankDetails]:
        if account is None:
            return None
        return BankDetails(name=account.name, bik=account.bik, account=account.account)

    @staticmethod
    def _signatory(employee: Optional[Employee]) -> Optional[Signatory]:
        if employee is None:
            return None
        return Signatory(full_name=employee.full_name, role=employee.role)
