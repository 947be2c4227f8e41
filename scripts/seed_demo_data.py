"""Seed demo data into the DressStudio database."""

from __future__ import annotations

import argparse
import random
import sys
from dataclasses import dataclass
from datetime import date, timedelta
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = REPO_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from dress_studio.app_services import build_services  # noqa: E402
from dress_studio.config import load_config  # noqa: E402
from dress_studio.db.migrations import apply_migrations  # noqa: E402
from dress_studio.db.storage import create_storage  # noqa: E402
from dress_studio.domain.models import AppointmentType, PaymentMethod  # noqa: E402
from dress_studio.logging_config import configure_logging, get_logger  # noqa: E402
from dress_studio.paths import get_db_path  # noqa: E402
from dress_studio.services.errors import ConflictError  # noqa: E402

DEFAULT_SEED = 42
SEED_TAG = "Seed Demo"


@dataclass(frozen=True)
class DressSeed:
    name: str
    size: str
    color: str
    rental_price: float


DRESS_SEEDS = [
    DressSeed("Champagne Mermaid", "36", "Champagne", 650.0),
    DressSeed("Midnight Velvet", "38", "Navy", 480.0),
    DressSeed("Rose Tulle Ballgown", "40", "Blush", 720.0),
    DressSeed("Emerald Satin Slip", "34", "Emerald", 390.0),
    DressSeed("Ivory Lace A-Line", "42", "Ivory", 850.0),
    DressSeed("Ruby Sequin Sheath", "36", "Red", 520.0),
]

CUSTOMER_SEEDS = [
    ("Noa Levi", "050-1234567"),
    ("Maya Cohen", "052-7654321"),
    ("Tamar Mizrahi", "054-1112233"),
    ("Yael Friedman", "053-9988776"),
    ("Shira Katz", "058-4455667"),
]


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed demo data for DressStudio")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Remove the local database file before seeding.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=DEFAULT_SEED,
        help="Seed for randomness.",
    )
    parser.add_argument(
        "--rentals",
        type=int,
        default=12,
        help="Number of rentals to attempt.",
    )
    return parser.parse_args()


def main() -> None:
    args = _parse_args()
    rng = random.Random(args.seed)
    config = load_config()
    configure_logging(config.log_level)
    logger = get_logger("seed_demo_data")

    if args.reset and not config.database_url:
        db_path = config.db_path or get_db_path()
        if db_path.exists():
            db_path.unlink()
            logger.info("Removed %s", db_path)

    storage = create_storage(config)
    try:
        apply_migrations(storage)
        services = build_services(storage, config)

        dresses = [
            services.inventory_service.create_dress(
                name=seed.name,
                description=SEED_TAG,
                size=seed.size,
                color=seed.color,
                rental_price=seed.rental_price,
            )
            for seed in DRESS_SEEDS
        ]
        customers = [
            services.customer_service.create_customer(
                name=name, phone=phone, notes=SEED_TAG
            )
            for name, phone in CUSTOMER_SEEDS
        ]

        today = date.today()
        created = 0
        for _ in range(args.rentals):
            dress = rng.choice(dresses)
            customer = rng.choice(customers)
            start = today + timedelta(days=rng.randint(-60, 30))
            end = start + timedelta(days=rng.randint(1, 4))
            try:
                rental = services.rental_service.create_rental(
                    dress_id=dress.id,
                    customer_id=customer.id,
                    start_date=start,
                    end_date=end,
                    total_price=dress.rental_price,
                    deposit=round(dress.rental_price * 0.2, 2),
                    notes=SEED_TAG,
                )
            except ConflictError:
                continue
            created += 1
            services.payment_service.record_payment(
                rental_id=rental.id,
                amount=dress.rental_price,
                payment_date=start,
                method=rng.choice(list(PaymentMethod)).value,
                notes=SEED_TAG,
            )
            if end < today:
                services.rental_service.complete_rental(rental.id)

        for offset in range(0, 5):
            customer = rng.choice(customers)
            services.appointment_service.create_appointment(
                appointment_type=rng.choice(list(AppointmentType)),
                appointment_date=today + timedelta(days=offset),
                customer_id=customer.id,
                dress_id=rng.choice(dresses).id,
                time=f"{rng.randint(9, 18):02d}:00",
                notes=SEED_TAG,
            )

        logger.info(
            "Seeded %s dresses, %s customers, %s rentals",
            len(dresses),
            len(customers),
            created,
        )
    finally:
        storage.close()


if __name__ == "__main__":
    main()
