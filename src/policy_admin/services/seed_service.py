# PolicyAdmin - Policy Term Administration Backend
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Deterministic demo data for local development.

The generator draws everything from a Faker instance seeded with a fixed
value, so repeated runs produce the same policies, names, dates and
balances. Identifiers are name-based UUIDs derived from the policy number,
which keeps them stable across runs without a persisted counter.

Loading replaces the whole dataset inside one transaction: terms are
deleted before policies, then everything is inserted. A failure leaves the
previous dataset untouched.
"""

import calendar
import hashlib
import logging
from datetime import date, datetime, time, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal
from uuid import UUID

from attrs import field, frozen
from beartype import beartype
from faker import Faker
from sqlalchemy import delete

from ..core.config import Settings
from ..core.database import Database
from ..models.policy import Policy, PolicyTerm, TermStatus

logger = logging.getLogger(__name__)

RANDOM_SEED = 49201
ANCHOR_DATE = date(2024, 1, 1)

MIN_POLICIES = 400
EXTRA_POLICIES = 100
MAX_TERMS_PER_POLICY = 3

STATES: tuple[str, ...] = ("CA", "TX", "NY", "FL", "IL", "WA", "OR", "AZ", "CO", "GA")
STATUSES: tuple[str, ...] = tuple(status.value for status in TermStatus)
ORG_SUFFIXES: tuple[str, ...] = (
    "Holdings",
    "Group",
    "Partners",
    "Logistics",
    "Manufacturing",
    "Foods",
    "Energy",
    "Consulting",
    "Retail",
    "Industries",
)

_CENTS = Decimal("0.01")


class SeedingNotAllowedError(RuntimeError):
    """Raised when seeding is requested outside a development environment."""


@beartype
def name_uuid(value: str) -> UUID:
    """Name-based (MD5, version 3) UUID of a string, without a namespace.

    The digest of the raw bytes gets the version 3 and RFC 4122 variant bits,
    so the same name always yields the same identifier.
    """
    digest = bytearray(hashlib.md5(value.encode("utf-8")).digest())  # nosec B324 - identifier derivation, not security
    digest[6] = (digest[6] & 0x0F) | 0x30
    digest[8] = (digest[8] & 0x3F) | 0x80
    return UUID(bytes=bytes(digest))


@beartype
def policy_number_for(index: int) -> str:
    """Zero-padded sequential policy number, 1-based."""
    return f"OH-{index:06d}"


@beartype
def add_months(value: date, months: int) -> date:
    """Shift a date by whole months, clamping to the end of shorter months."""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


@beartype
def add_years(value: date, years: int) -> date:
    """Shift a date by whole years (Feb 29 clamps to Feb 28)."""
    return add_months(value, years * 12)


@frozen
class SeedDataset:
    """Generated policies and terms, not yet persisted."""

    policies: list[Policy] = field()
    terms: list[PolicyTerm] = field()


class PolicySeedGenerator:
    """Builds a reproducible set of policies with 1-3 yearly terms each."""

    def __init__(self, seed: int = RANDOM_SEED, anchor_date: date = ANCHOR_DATE) -> None:
        """Initialize with a fixed seed and anchor date."""
        self._seed = seed
        self._anchor_date = anchor_date

    @property
    def anchor_instant(self) -> datetime:
        """Anchor date at midnight UTC."""
        return datetime.combine(self._anchor_date, time.min, tzinfo=timezone.utc)

    @beartype
    def generate(self) -> SeedDataset:
        """Generate the full dataset from a freshly seeded Faker."""
        fake = Faker("en_US")
        fake.seed_instance(self._seed)
        rng = fake.random

        policy_count = MIN_POLICIES + rng.randint(0, EXTRA_POLICIES)
        policies: list[Policy] = []
        terms: list[PolicyTerm] = []

        for index in range(1, policy_count + 1):
            policy_number = policy_number_for(index)
            insured_name = self._insured_name(fake)
            created_at = self.anchor_instant - timedelta(days=rng.randint(0, 364))
            updated_at = created_at + timedelta(days=rng.randint(0, 29))

            policy = Policy(
                id=name_uuid(f"policy-{policy_number}"),
                policy_number=policy_number,
                insured_name=insured_name,
                created_at=created_at,
                updated_at=updated_at,
            )
            policies.append(policy)

            term_count = rng.randint(1, MAX_TERMS_PER_POLICY)
            first_start = add_months(self._anchor_date, -rng.randint(0, 23))

            for term_number in range(1, term_count + 1):
                effective_from = add_years(first_start, term_number - 1)
                effective_to = add_years(effective_from, 1) - timedelta(days=1)
                next_due = add_months(effective_from, rng.randint(1, 3))
                last_payment = next_due - timedelta(days=rng.randint(5, 24))
                status = rng.choice(STATUSES)
                balance_due = Decimal(str(50 + rng.random() * 1450)).quantize(
                    _CENTS, rounding=ROUND_HALF_UP
                )

                terms.append(
                    PolicyTerm(
                        id=name_uuid(f"{policy_number}-term-{term_number}"),
                        policy=policy,
                        term_number=term_number,
                        state=rng.choice(STATES),
                        status=status,
                        effective_from_date=effective_from,
                        effective_to_date=effective_to,
                        balance_due=balance_due,
                        next_due_date=next_due,
                        last_payment_date=last_payment,
                        created_at=created_at,
                        updated_at=updated_at,
                    )
                )

        return SeedDataset(policies=policies, terms=terms)

    @staticmethod
    def _insured_name(fake: Faker) -> str:
        base = f"{fake.first_name()} {fake.last_name()}"
        if fake.boolean():
            return f"{base} {fake.random_element(ORG_SUFFIXES)}"
        return base


@beartype
async def seed_database(
    database: Database,
    generator: PolicySeedGenerator | None = None,
) -> SeedDataset:
    """Replace all policies and terms with freshly generated seed data.

    Runs as a single transaction; any failure rolls everything back and is
    re-raised to the caller.
    """
    dataset = (generator or PolicySeedGenerator()).generate()

    async with database.transaction() as session:
        await session.execute(delete(PolicyTerm))
        await session.execute(delete(Policy))
        # the unit of work inserts policies before the terms that reference them
        session.add_all(dataset.policies)
        session.add_all(dataset.terms)

    logger.info(
        "Seeded %d policies and %d policy terms (deterministic seed).",
        len(dataset.policies),
        len(dataset.terms),
    )
    return dataset


@beartype
async def seed_if_allowed(
    database: Database,
    settings: Settings,
    generator: PolicySeedGenerator | None = None,
) -> SeedDataset:
    """Seed only in development environments."""
    if not settings.seeding_allowed:
        raise SeedingNotAllowedError(
            f"Seeding is disabled in the {settings.api_env} environment"
        )
    return await seed_database(database, generator)
