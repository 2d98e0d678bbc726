"""
Pricing configuration providers.

The quote service reads pricing and availability through this interface
instead of a global client, so tests and callers can inject their own
source. Two implementations:
- InMemoryPricingConfigProvider: process-local, seeded with defaults
- RemotePricingConfigProvider: PostgREST-style table API over httpx,
  guarded by a circuit breaker
"""

import abc
import logging
import uuid
from decimal import Decimal
from typing import Dict, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ridefare.app.core.exceptions import PricingStoreUnavailableError, ResourceNotFoundError
from ridefare.app.core.reliability import CircuitBreaker, CircuitOpenError
from ridefare.app.models.pricing import PricingConfiguration, AvailabilityRule
from ridefare.app.models.pricing_enums import ServiceType, ServiceFeeType

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_rows(model: Type[ModelT], rows: List[dict]) -> List[ModelT]:
    """Validate store rows, skipping the ones that cannot be read."""
    parsed = []
    for row in rows:
        try:
            parsed.append(model.model_validate(row))
        except ValidationError as exc:
            logger.warning(
                "Skipping malformed %s row %s: %d errors", model.__name__, row.get("id"), exc.error_count()
            )
    return parsed


def default_pricing(service_type: ServiceType) -> PricingConfiguration:
    """Configuration a new service type starts with: R$ 2,50 per km, no fee."""
    return PricingConfiguration(
        service_type=service_type,
        price_per_km=Decimal("2.5"),
        price_per_km_active=True,
        fixed_price=None,
        fixed_price_active=False,
        service_fee_type=ServiceFeeType.FIXED,
        service_fee_value=Decimal("0"),
    )


class PricingConfigProvider(abc.ABC):
    """Source of pricing configuration and availability rules."""

    @abc.abstractmethod
    async def get_pricing(self, service_type: ServiceType) -> Optional[PricingConfiguration]:
        ...

    @abc.abstractmethod
    async def list_pricing(self) -> List[PricingConfiguration]:
        ...

    @abc.abstractmethod
    async def save_pricing(self, config: PricingConfiguration) -> PricingConfiguration:
        ...

    @abc.abstractmethod
    async def list_availability_rules(
        self,
        service_type: Optional[ServiceType] = None,
        region: Optional[str] = None,
    ) -> List[AvailabilityRule]:
        ...

    @abc.abstractmethod
    async def save_availability_rule(self, rule: AvailabilityRule) -> AvailabilityRule:
        ...

    @abc.abstractmethod
    async def delete_availability_rule(self, rule_id: str) -> None:
        ...


class InMemoryPricingConfigProvider(PricingConfigProvider):

    def __init__(
        self,
        pricing: Optional[List[PricingConfiguration]] = None,
        rules: Optional[List[AvailabilityRule]] = None,
    ):
        self._pricing: Dict[ServiceType, PricingConfiguration] = {
            config.service_type: config for config in (pricing or [])
        }
        self._rules: Dict[str, AvailabilityRule] = {}
        for rule in rules or []:
            self._store_rule(rule)

    @classmethod
    def with_defaults(cls, region: str) -> "InMemoryPricingConfigProvider":
        """Every service type priced per km and available all week in one region."""
        pricing = [default_pricing(service_type) for service_type in ServiceType]
        rules = [
            AvailabilityRule(
                service_type=service_type,
                region=region,
                weekday_mask=frozenset(range(1, 8)),
                time_start="00:00",
                time_end="23:59",
            )
            for service_type in ServiceType
        ]
        return cls(pricing=pricing, rules=rules)

    def _store_rule(self, rule: AvailabilityRule) -> AvailabilityRule:
        if rule.id is None:
            rule = rule.model_copy(update={"id": str(uuid.uuid4())})
        self._rules[rule.id] = rule
        return rule

    async def get_pricing(self, service_type: ServiceType) -> Optional[PricingConfiguration]:
        return self._pricing.get(service_type)

    async def list_pricing(self) -> List[PricingConfiguration]:
        return [self._pricing[t] for t in ServiceType if t in self._pricing]

    async def save_pricing(self, config: PricingConfiguration) -> PricingConfiguration:
        self._pricing[config.service_type] = config
        return config

    async def list_availability_rules(
        self,
        service_type: Optional[ServiceType] = None,
        region: Optional[str] = None,
    ) -> List[AvailabilityRule]:
        return [
            rule for rule in self._rules.values()
            if (service_type is None or rule.service_type == service_type)
            and (region is None or rule.region == region)
        ]

    async def save_availability_rule(self, rule: AvailabilityRule) -> AvailabilityRule:
        return self._store_rule(rule)

    async def delete_availability_rule(self, rule_id: str) -> None:
        if self._rules.pop(rule_id, None) is None:
            raise ResourceNotFoundError("Availability rule", rule_id)


class RemotePricingConfigProvider(PricingConfigProvider):
    """
    Reads and writes the `pricing_settings` and `service_availability_rules`
    tables of a PostgREST-compatible API.
    """

    PRICING_TABLE = "pricing_settings"
    RULES_TABLE = "service_availability_rules"

    def __init__(
        self,
        client: httpx.AsyncClient,
        circuit_breaker: Optional[CircuitBreaker] = None,
    ):
        self.client = client
        self.circuit_breaker = circuit_breaker or CircuitBreaker(failure_threshold=3, reset_timeout=30)

    @classmethod
    def from_url(
        cls,
        base_url: str,
        api_key: Optional[str] = None,
        timeout: float = 5.0,
        circuit_breaker: Optional[CircuitBreaker] = None,
    ) -> "RemotePricingConfigProvider":
        headers = {"Accept": "application/json"}
        if api_key:
            headers["apikey"] = api_key
            headers["Authorization"] = f"Bearer {api_key}"
        client = httpx.AsyncClient(base_url=base_url, headers=headers, timeout=timeout)
        return cls(client, circuit_breaker)

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _send(self, method: str, path: str, **kwargs) -> httpx.Response:
        response = await self.client.request(method, path, **kwargs)
        response.raise_for_status()
        return response

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            return await self.circuit_breaker.call(self._send, method, path, **kwargs)
        except CircuitOpenError:
            logger.warning("Configuration store circuit open, skipping %s %s", method, path)
            raise PricingStoreUnavailableError()
        except httpx.HTTPError as exc:
            logger.error("Configuration store request failed: %s %s: %s", method, path, exc)
            raise PricingStoreUnavailableError(f"Pricing configuration store error: {exc}")

    async def get_pricing(self, service_type: ServiceType) -> Optional[PricingConfiguration]:
        response = await self._request(
            "GET", f"/{self.PRICING_TABLE}",
            params={
                "service_type": f"eq.{service_type.value}",
                "order": "created_at.desc",
                "limit": "1",
            },
        )
        configs = parse_rows(PricingConfiguration, response.json())
        return configs[0] if configs else None

    async def list_pricing(self) -> List[PricingConfiguration]:
        response = await self._request(
            "GET", f"/{self.PRICING_TABLE}", params={"order": "service_type.asc"}
        )
        return parse_rows(PricingConfiguration, response.json())

    async def save_pricing(self, config: PricingConfiguration) -> PricingConfiguration:
        response = await self._request(
            "POST", f"/{self.PRICING_TABLE}",
            params={"on_conflict": "service_type"},
            json=config.model_dump(mode="json"),
            headers={"Prefer": "resolution=merge-duplicates,return=representation"},
        )
        rows = response.json()
        return PricingConfiguration.model_validate(rows[0]) if rows else config

    async def list_availability_rules(
        self,
        service_type: Optional[ServiceType] = None,
        region: Optional[str] = None,
    ) -> List[AvailabilityRule]:
        params = {}
        if service_type is not None:
            params["service_type"] = f"eq.{service_type.value}"
        if region is not None:
            params["region"] = f"eq.{region}"
        response = await self._request("GET", f"/{self.RULES_TABLE}", params=params)
        return parse_rows(AvailabilityRule, response.json())

    async def save_availability_rule(self, rule: AvailabilityRule) -> AvailabilityRule:
        payload = rule.model_dump(mode="json", exclude_none=True)
        response = await self._request(
            "POST", f"/{self.RULES_TABLE}",
            json=payload,
            headers={"Prefer": "resolution=merge-duplicates,return=representation"},
        )
        rows = response.json()
        return AvailabilityRule.model_validate(rows[0]) if rows else rule

    async def delete_availability_rule(self, rule_id: str) -> None:
        response = await self._request(
            "DELETE", f"/{self.RULES_TABLE}",
            params={"id": f"eq.{rule_id}"},
            headers={"Prefer": "return=representation"},
        )
        if not response.json():
            raise ResourceNotFoundError("Availability rule", rule_id)
