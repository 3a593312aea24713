from __future__ import annotations

from flask import Flask, jsonify, request

from ..core.exceptions import StoreError, ValidationError
from ..container import Container
from .model import event_to_dict


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employe", methods=["GET"], endpoint="api_employe_list")
    def api_employe_list():
        try:
            events = container.event_service.list_events()
            return jsonify([event_to_dict(e) for e in events]), 200
        except Exception:
            app.logger.exception("Erreur lors de la récupération des pointages")
            return jsonify({"error": "Erreur interne du serveur"}), 500

    @app.route("/api/employe", methods=["POST"], endpoint="api_employe_create")
    def api_employe_create():
        try:
            event = container.event_service.submit(request.get_json(silent=True) or {})
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except StoreError as e:
            app.logger.error("Erreur lors de la sauvegarde: %s", e)
            return jsonify({"error": "Erreur interne du serveur"}), 500
        except Exception:
            app.logger.exception("Erreur inattendue lors de la sauvegarde")
            return jsonify({"error": "Erreur interne du serveur"}), 500

        app.logger.info("Pointage %s sauvegardé: id=%s", event.event_type.value, event.event_id)
        return jsonify({
            "success": True,
            "data": event_to_dict(event),
            "message": f"Pointage {event.event_type.value} enregistré avec succès",
        })
