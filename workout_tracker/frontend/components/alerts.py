"""
Alert Component
=============

User-visible messages: a dismissable alert for rejected form input and a
persistent banner for location problems.
"""

from typing import Optional
import logging

from dash import html
import dash_bootstrap_components as dbc

logger = logging.getLogger(__name__)


class AlertState:
    """Pending alert text and the location banner."""

    def __init__(self):
        self.alert_message: Optional[str] = None
        self.banner_message: Optional[str] = None

    def alert(self, message: str) -> None:
        logger.info(f"Alert: {message}")
        self.alert_message = message

    def banner(self, message: Optional[str]) -> None:
        self.banner_message = message

    def dismiss_alert(self) -> None:
        self.alert_message = None

    def reset(self) -> None:
        self.alert_message = None
        self.banner_message = None


def create_alert_layout():
    """Create the alert and banner placeholders."""
    return html.Div([
        dbc.Alert(
            id='location-banner',
            color="warning",
            is_open=False,
            className="mb-2"
        ),
        dbc.Alert(
            id='form-alert',
            color="danger",
            is_open=False,
            dismissable=True,
            className="mb-2"
        ),
    ])
