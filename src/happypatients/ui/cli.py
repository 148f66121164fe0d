# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from happypatients.adapters.cache.translator import patient_to_payload, treatment_to_payload
from happypatients.app import (
    build_patient_cache,
    build_treatment_service,
    find_patient,
    get_cache_policy,
    register_patient,
    set_cache_policy,
)
from happypatients.config import configure_logging
from happypatients.domain.model import TreatmentRecord, TreatmentStatus

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _add_treatment_fields(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--patient-id", type=str, required=True, help="Patient UUID")
    parser.add_argument(
        "--condition",
        type=str,
        required=True,
        help="Medical condition the treatment is for (one record per condition)",
    )
    parser.add_argument("--diagnosis", type=str, required=True, help="Diagnosis text")
    parser.add_argument("--doctor", type=str, required=True, help="Treating doctor's name")
    parser.add_argument("--start", type=str, required=True, help="Start date (YYYY-MM-DD)")
    parser.add_argument("--end", type=str, help="End date (YYYY-MM-DD)")
    parser.add_argument("--report", type=str, default="", help="Free-text report")
    parser.add_argument(
        "--status",
        type=str,
        default=str(TreatmentStatus.ONGOING),
        choices=[str(status) for status in TreatmentStatus],
        help="Treatment status (default: %(default)s)",
    )


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage patient treatments and their cache")
    subparsers = parser.add_subparsers(dest="command", required=True)

    patient = subparsers.add_parser("patient", help="Patient commands")
    patient_sub = patient.add_subparsers(dest="patient_command", required=True)
    patient_create = patient_sub.add_parser("create", help="Register a patient")
    patient_create.add_argument("--name", type=str, required=True, help="Patient name")
    patient_create.add_argument("--date-of-birth", type=str, help="Date of birth (YYYY-MM-DD)")
    patient_create.add_argument("--contact-number", type=str, help="Contact phone number")
    patient_create.add_argument("--id", type=str, help="Use this UUID instead of a new one")
    patient_show = patient_sub.add_parser(
        "show",
        help=(
            "Show a patient and their treatments. Reads the cache first; the default memory "
            "backend lives only for one process, so set HAPPYPATIENTS_CACHE_BACKEND=redis "
            "to share cached patients between commands"
        ),
    )
    patient_show.add_argument("patient_id", type=str, help="Patient UUID")

    treatment = subparsers.add_parser("treatment", help="Treatment commands")
    treatment_sub = treatment.add_subparsers(dest="treatment_command", required=True)
    _add_treatment_fields(treatment_sub.add_parser("add", help="Record a new treatment"))
    _add_treatment_fields(treatment_sub.add_parser("update", help="Update a treatment"))
    treatment_list = treatment_sub.add_parser("list", help="List a patient's treatments")
    treatment_list.add_argument("--patient-id", type=str, required=True, help="Patient UUID")
    treatment_delete = treatment_sub.add_parser("delete", help="Delete treatments")
    treatment_delete.add_argument("--patient-id", type=str, required=True, help="Patient UUID")
    treatment_delete.add_argument(
        "--condition",
        type=str,
        help="Only delete the treatment for this medical condition",
    )

    policy = subparsers.add_parser("policy", help="Cache eligibility policy commands")
    policy_sub = policy.add_subparsers(dest="policy_command", required=True)
    policy_sub.add_parser("show", help="Print the current policy label")
    policy_set = policy_sub.add_parser("set", help="Change the policy label")
    policy_set.add_argument("label", type=str, help="Treatment status that makes patients cacheable")

    return parser.parse_args(list(argv))


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value.strip())
    except ValueError as exc:
        raise ValueError(f"Invalid date: {value}") from exc


def _treatment_from_args(args: argparse.Namespace) -> TreatmentRecord:
    return TreatmentRecord(
        patient_id=args.patient_id,
        medical_condition=args.condition,
        diagnosis=args.diagnosis,
        doctor_name=args.doctor,
        start_date=_parse_date(args.start),
        end_date=_parse_date(args.end) if args.end else None,
        report=args.report,
        status=TreatmentStatus(args.status),
    )


def _run(args: argparse.Namespace) -> bool:
    """Dispatch one command; return whether the store accepted it."""

    if args.command == "patient" and args.patient_command == "create":
        patient = register_patient(
            name=args.name,
            date_of_birth=_parse_date(args.date_of_birth) if args.date_of_birth else None,
            contact_number=args.contact_number,
            patient_id=args.id,
        )
        print(patient.id)
        return True

    if args.command == "patient" and args.patient_command == "show":
        found = find_patient(args.patient_id, cache=build_patient_cache())
        if found is None:
            log.error("Patient %s not found", args.patient_id)
            return False
        print(patient_to_payload(found).model_dump_json(indent=2))
        return True

    if args.command == "treatment":
        service = build_treatment_service()
        if args.treatment_command == "add":
            return service.add_treatment_information(_treatment_from_args(args))
        if args.treatment_command == "update":
            return service.update_treatment(_treatment_from_args(args))
        if args.treatment_command == "list":
            for record in service.get_treatment_information(args.patient_id):
                print(treatment_to_payload(record).model_dump_json())
            return True
        if args.treatment_command == "delete":
            return service.delete_patient_treatment(args.patient_id, args.condition)

    if args.command == "policy" and args.policy_command == "show":
        print(get_cache_policy())
        return True

    if args.command == "policy" and args.policy_command == "set":
        print(set_cache_policy(args.label))
        return True

    raise ValueError(f"Unsupported command: {args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)

    try:
        succeeded = _run(parsed_args)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error")
        sys.exit(1)

    if not succeeded:
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
