from __future__ import annotations

import logging

import flet as ft

from gradecalc.config.settings import settings
from gradecalc.services.storage_service import SessionStore
from gradecalc.state.session_state import SessionState
from gradecalc.ui.views.calculator_view import build_calculator_view

logger = logging.getLogger(__name__)


class GradeCalculatorApp:
    def __init__(self, page: ft.Page) -> None:
        self.page = page
        self.page.title = settings.app_title
        self.session = SessionState(store=SessionStore.from_page(page))

    def run(self) -> None:
        self.session.load()
        logger.info("Loaded %d subjects", len(self.session.subjects))
        self.page.views.clear()
        self.page.views.append(build_calculator_view(self.page, self.session))
        self.page.update()


def main(page: ft.Page) -> None:
    GradeCalculatorApp(page).run()
