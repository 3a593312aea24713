from __future__ import annotations

import click
from flask import Flask

from ..container import Container
from ..core.enums import EventType
from ..core.exceptions import DomainError
from ..profiles.store import ProfileStore
from .model import Location
from .punch import FixedLocationProvider, LocationProvider, PunchWorkflow


def register(app: Flask, container: Container, *, profiles: ProfileStore, locations: LocationProvider | None) -> None:
    """``flask punch debut|fin``: pointage depuis un poste fixe (kiosque)."""

    @app.cli.command("punch")
    @click.argument("event_type", type=click.Choice([t.value for t in EventType]))
    @click.option("--hotel", required=True, help="Nom de l'hôtel")
    @click.option("--nom", default=None, help="Nom complet (mémorisé après le premier pointage)")
    @click.option("--telephone", default=None, help="Téléphone (mémorisé après le premier pointage)")
    @click.option("--lat", type=float, default=None, help="Latitude si le poste n'en a pas de configurée")
    @click.option("--lng", type=float, default=None, help="Longitude si le poste n'en a pas de configurée")
    def punch(event_type: str, hotel: str, nom: str | None, telephone: str | None, lat: float | None, lng: float | None):
        provider = locations
        if lat is not None and lng is not None:
            provider = FixedLocationProvider(Location(latitude=lat, longitude=lng))
        if provider is None:
            raise click.UsageError("Aucune position: configurez KIOSK_LATITUDE/KIOSK_LONGITUDE ou passez --lat/--lng")

        workflow = PunchWorkflow(
            container.event_service,
            provider,
            profiles,
            location_timeout=container.location_timeout,
        )
        saved = workflow.prefill()
        try:
            event = workflow.punch(
                nom=nom if nom is not None else saved.nom,
                telephone=telephone if telephone is not None else saved.telephone,
                hotel=hotel,
                event_type=EventType(event_type),
            )
        except DomainError as e:
            raise click.ClickException(str(e)) from e

        click.echo(f"Pointage {event.event_type.label} enregistré (id={event.event_id})")
