from __future__ import annotations

import csv
import re
from decimal import Decimal, InvalidOperation
from pathlib import Path

import openpyxl
from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from booking.models import PricingTier, Vehicle, VehicleClass
from booking.services.pricing import PricingTier as TierRule
from booking.services.pricing import validate_tiers

TIER_RE = re.compile(r"^\s*(\d+)\s*-\s*(\d+)\s*:\s*([0-9]+(?:[.,][0-9]+)?)\s*$")


def _read_csv_rows(path: Path):
    with path.open(encoding="utf-8-sig", newline="") as handle:
        return list(csv.DictReader(handle))


def _read_xlsx_rows(path: Path):
    wb = openpyxl.load_workbook(path, read_only=True, data_only=True)
    ws = wb.active
    rows = []
    header = []
    for idx, row in enumerate(ws.iter_rows(values_only=True)):
        if idx == 0:
            header = [str(cell).strip() if cell is not None else "" for cell in row]
            continue
        if not header:
            break
        data = {}
        for col_idx, header_name in enumerate(header):
            value = row[col_idx] if col_idx < len(row) else ""
            if isinstance(value, float) and value.is_integer():
                value = int(value)
            data[header_name] = value
        rows.append(data)
    wb.close()
    return rows


def load_rows(path: Path):
    if path.suffix.lower() == ".xlsx":
        return _read_xlsx_rows(path)
    return _read_csv_rows(path)


def _text(row, key) -> str:
    value = row.get(key)
    if value is None:
        return ""
    return str(value).strip()


def _int_or_none(value: str):
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def parse_tiers(raw: str) -> list[TierRule]:
    """Parse ``"1-3:100; 4-7:80; 8-999:60"`` into tier rules."""
    tiers = []
    for piece in re.split(r"[;|\n]+", raw or ""):
        if not piece.strip():
            continue
        match = TIER_RE.match(piece)
        if not match:
            raise ValidationError(f"Cannot read pricing tier {piece.strip()!r}.")
        try:
            price = Decimal(match.group(3).replace(",", "."))
        except InvalidOperation as exc:
            raise ValidationError(f"Cannot read price in {piece.strip()!r}.") from exc
        tiers.append(TierRule(int(match.group(1)), int(match.group(2)), price))
    return tiers


class Command(BaseCommand):
    help = (
        "Import vehicles from a CSV/XLSX file. Columns: make, model, year, class, type, "
        "transmission, fuel_type, seats, location, pricing_tiers (e.g. '1-3:100; 4-7:80; 8-999:60')."
    )

    def add_arguments(self, parser):
        parser.add_argument("path", type=str, help="Path to the .csv or .xlsx file.")

    def handle(self, *args, **options):
        path = Path(options["path"])
        if not path.exists():
            raise CommandError(f"File not found: {path}")
        if not path.is_file():
            raise CommandError(f"Not a file: {path}")

        try:
            rows = load_rows(path)
        except Exception as exc:  # noqa: BLE001
            raise CommandError(f"Failed to read file: {path}. Error: {exc}") from exc

        if not rows:
            self.stdout.write(self.style.WARNING("No rows found (empty file)."))
            return

        imported, skipped = 0, 0
        for index, row in enumerate(rows, start=2):
            make, model = _text(row, "make"), _text(row, "model")
            if not make or not model:
                skipped += 1
                self.stdout.write(self.style.WARNING(f"Row {index}: make and model are required, skipped."))
                continue
            try:
                tiers = parse_tiers(_text(row, "pricing_tiers"))
                validate_tiers(tiers)
            except ValidationError as exc:
                skipped += 1
                self.stdout.write(self.style.WARNING(f"Row {index}: {' '.join(exc.messages)} Skipped."))
                continue

            with transaction.atomic():
                vehicle_class = None
                class_name = _text(row, "class")
                if class_name:
                    vehicle_class, _ = VehicleClass.objects.get_or_create(name=class_name)
                vehicle = Vehicle.objects.create(
                    make=make,
                    model=model,
                    year=_int_or_none(_text(row, "year")),
                    vehicle_type=_text(row, "type").lower(),
                    transmission=_text(row, "transmission").lower(),
                    fuel_type=_text(row, "fuel_type").lower(),
                    seats=_int_or_none(_text(row, "seats")),
                    location=_text(row, "location"),
                    vehicle_class=vehicle_class,
                )
                PricingTier.objects.bulk_create(
                    PricingTier(
                        vehicle=vehicle,
                        min_days=tier.min_days,
                        max_days=tier.max_days,
                        price_per_day=tier.price_per_day,
                    )
                    for tier in tiers
                )
            imported += 1

        self.stdout.write(self.style.SUCCESS(f"Imported {imported} vehicles, skipped {skipped}."))
