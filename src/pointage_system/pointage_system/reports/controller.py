from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..core.exceptions import ValidationError
from ..rotations.model import RotationQuery, entry_to_dict
from .export import CsvExport
from .filters import EventFilter


def register(app: Flask, container: Container) -> None:
    reports = container.report_service

    def _rotation_query() -> RotationQuery:
        return RotationQuery.from_args(date_value=request.args.get("date"), search=request.args.get("search"))

    def _event_filter() -> EventFilter:
        return EventFilter.from_args(
            search=request.args.get("search"),
            date_value=request.args.get("date"),
            type_value=request.args.get("type"),
        )

    def _csv_response(export: CsvExport):
        return app.response_class(
            export.content,
            mimetype=export.mimetype,
            headers={"Content-Disposition": f"attachment; filename={export.filename}"},
        )

    def _server_error(message: str):
        app.logger.exception(message)
        return jsonify({"error": message}), 500

    @app.route("/api/admin/pointages", methods=["GET"], endpoint="admin_pointages")
    def admin_pointages():
        try:
            entries = container.rotation_service.search(_rotation_query())
            return jsonify([entry_to_dict(e) for e in entries])
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except Exception:
            return _server_error("Erreur lors de la récupération des pointages")

    @app.route("/api/admin/pointages/summary", methods=["GET"], endpoint="admin_pointages_summary")
    def admin_pointages_summary():
        try:
            overview = reports.rotation_overview(_rotation_query())
            return jsonify({
                "summary": overview.summary.to_dict(),
                "hotels": [g.to_dict() for g in overview.hotels],
            })
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except Exception:
            return _server_error("Erreur lors du calcul du récapitulatif")

    @app.route("/api/admin/pointages.csv", methods=["GET"], endpoint="admin_pointages_csv")
    def admin_pointages_csv():
        try:
            return _csv_response(reports.rotation_export(_rotation_query()))
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except Exception:
            return _server_error("Erreur lors de l'export des pointages")

    @app.route("/api/admin/employe", methods=["GET"], endpoint="admin_employe")
    def admin_employe():
        try:
            overview = reports.employee_overview(_event_filter())
            return jsonify({
                "count": len(overview.groups),
                "events": overview.event_count,
                "filtersActive": overview.filters_active,
                "groups": [g.to_dict() for g in overview.groups],
            })
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except Exception:
            return _server_error("Erreur lors du chargement des pointages")

    @app.route("/api/admin/employe.csv", methods=["GET"], endpoint="admin_employe_csv")
    def admin_employe_csv():
        try:
            return _csv_response(reports.employee_export(_event_filter()))
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except Exception:
            return _server_error("Erreur lors de l'export des pointages")
