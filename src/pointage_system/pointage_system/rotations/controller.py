from __future__ import annotations

from flask import Flask, jsonify, request

from ..core.exceptions import StoreError, ValidationError
from ..container import Container
from .model import submitter_to_dict


def register(app: Flask, container: Container) -> None:
    @app.route("/api/pointage", methods=["POST"], endpoint="api_pointage_create")
    def api_pointage_create():
        try:
            saved = container.rotation_service.submit(request.get_json(silent=True) or {})
            app.logger.info(
                "Pointage bus enregistré: %s (%s), %d date(s)",
                saved.submitter.name,
                saved.submitter.hotel,
                len(saved.entries),
            )
            return jsonify({
                "success": True,
                "message": "Pointage enregistré avec succès",
                "data": submitter_to_dict(saved),
            })
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except StoreError as e:
            app.logger.error("Erreur lors de l'enregistrement: %s", e)
            return jsonify({
                "success": False,
                "message": "Erreur lors de l'enregistrement du pointage",
                "error": str(e),
            }), 500
        except Exception as e:
            app.logger.exception("Erreur inattendue lors de l'enregistrement")
            return jsonify({
                "success": False,
                "message": "Erreur lors de l'enregistrement du pointage",
                "error": str(e),
            }), 500

    @app.route("/api/pointage", methods=["GET"], endpoint="api_pointage_list")
    def api_pointage_list():
        try:
            data = [submitter_to_dict(s) for s in container.rotation_service.list_submitters()]
            return jsonify({"success": True, "data": data})
        except Exception as e:
            app.logger.exception("Erreur lors de la récupération des pointages")
            return jsonify({
                "success": False,
                "message": "Erreur lors de la récupération des pointages",
                "error": str(e),
            }), 500
