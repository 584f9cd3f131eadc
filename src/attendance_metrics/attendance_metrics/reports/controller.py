from __future__ import annotations

import logging
from datetime import date, timedelta

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local, parse_iso_date
from ..core.constants import DEFAULT_REPORT_DAYS
from ..core.enums import GroupBy
from ..core.exceptions import DomainError, ValidationError
from ..container import Container
from .model import ReportFilters

logger = logging.getLogger(__name__)


def _parse_group_by(value: str | None) -> GroupBy:
    try:
        return GroupBy((value or GroupBy.DAY.value).strip().lower())
    except ValueError:
        raise ValidationError(f"Invalid group_by {value!r} (day, week or month)")


def _filters_from_args(args, today: date) -> ReportFilters:
    start_s = args.get("start") or (today - timedelta(days=DEFAULT_REPORT_DAYS - 1)).strftime("%Y-%m-%d")
    end_s = args.get("end") or today.strftime("%Y-%m-%d")

    employee_ids: list[str] = []
    for raw in args.getlist("employee_id"):
        for value in raw.split(","):
            value = value.strip()
            if value and value not in employee_ids:
                employee_ids.append(value)

    return ReportFilters(
        start=parse_iso_date(start_s),
        end=parse_iso_date(end_s),
        employee_ids=tuple(employee_ids),
        group_by=_parse_group_by(args.get("group_by")),
    )


def register(app: Flask, container: Container) -> None:
    @app.route("/api/reports/<kind>", methods=["GET"], endpoint="api_report")
    def api_report(kind: str):
        try:
            now = now_local()
            filters = _filters_from_args(request.args, now.date())
            payload = container.report_service().build(kind, filters, now)
        except DomainError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except Exception:
            logger.exception("Report %s failed", kind)
            return jsonify({"success": False, "message": "Internal error while generating report"}), 500

        return jsonify({"success": True, "data": payload.to_dict(), "message": f"{payload.kind.value} report generated"})
