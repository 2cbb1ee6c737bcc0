from typing import Callable, Dict, List, Optional
import flet as ft

from gradecalc.core.grades import GRADE_BANDS, Grade
from gradecalc.core.subjects import Number, Subject, parse_number
from gradecalc.state.session_state import SessionState


GRADE_COLORS: Dict[str, str] = {
    "O": ft.Colors.GREEN_500,
    "A+": ft.Colors.BLUE_500,
    "A": ft.Colors.INDIGO_500,
    "B+": ft.Colors.PURPLE_500,
    "B": ft.Colors.DEEP_PURPLE_400,
    "C": ft.Colors.ORANGE_500,
    "P": ft.Colors.AMBER_600,
    "F": ft.Colors.RED_500,
}


def _format_number(value: Optional[Number]) -> str:
    return "" if value is None else str(value)


def _shows(value: Optional[Number], text: str) -> bool:
    if value is None:
        return not text.strip()
    return parse_number(text) == value


def _paint_badge(badge: ft.Container, grade: Optional[Grade]) -> None:
    if grade is None:
        badge.content = ft.Text("-", color=ft.Colors.GREY_600)
        badge.bgcolor = ft.Colors.GREY_200
        return
    badge.content = ft.Text(f"{grade.letter} ({grade.points})", color=ft.Colors.WHITE, weight=ft.FontWeight.BOLD)
    badge.bgcolor = GRADE_COLORS[grade.letter]


def _summary_card(title: str, *controls: ft.Control) -> ft.Card:
    return ft.Card(
        content=ft.Container(
            padding=16,
            width=240,
            content=ft.Column(
                controls=[ft.Text(title, size=14, weight=ft.FontWeight.W_500), *controls],
                spacing=6,
            ),
        )
    )


def _grading_scale() -> ft.Control:
    uppers = [100] + [low - 1 for low, _, _ in GRADE_BANDS[:-1]]
    chips = []
    for (low, letter, points), high in zip(GRADE_BANDS, uppers):
        chips.append(
            ft.Row(
                controls=[
                    ft.Container(
                        content=ft.Text(letter, color=ft.Colors.WHITE, weight=ft.FontWeight.BOLD),
                        bgcolor=GRADE_COLORS[letter],
                        padding=ft.padding.symmetric(horizontal=10, vertical=4),
                        border_radius=6,
                    ),
                    ft.Text(f"{low}-{high} | {points} pts" if low else f"<35 | {points} pts"),
                ]
            )
        )
    return ft.Row(controls=chips, wrap=True, spacing=16)


def build_calculator_view(page: ft.Page, session: SessionState) -> ft.View:
    sgpa_text = ft.Text(size=26, weight=ft.FontWeight.BOLD)
    sgpa_bar = ft.ProgressBar(value=0, width=200)
    percentage_text = ft.Text(size=26, weight=ft.FontWeight.BOLD)
    credits_text = ft.Text(size=26, weight=ft.FontWeight.BOLD)

    rows_column = ft.Column(spacing=8)
    rendered_ids: List[str] = []
    name_fields: List[ft.TextField] = []
    badges: Dict[str, ft.Container] = {}

    def refresh_summary() -> None:
        summary = session.summary()
        sgpa_text.value = f"{summary.sgpa:.2f}"
        sgpa_bar.value = summary.sgpa / 10
        percentage_text.value = f"{summary.percentage:.2f}%"
        credits_text.value = str(summary.total_credits)

    def refresh_badges() -> None:
        for subject in session.subjects:
            badge = badges.get(subject.id)
            if badge is not None:
                _paint_badge(badge, subject.grade)

    def focus_row(index: int) -> None:
        if 0 <= index < len(name_fields):
            name_fields[index].focus()

    def on_enter(index: int) -> None:
        target = session.next_focus(index)
        page.update()
        focus_row(target)

    def numeric_field(
        label: str,
        subject_id: str,
        value: Optional[Number],
        edit: Callable[[str, str], bool],
        read: Callable[[Subject], Optional[Number]],
        index: int,
        hint: str = "",
    ) -> ft.TextField:
        field = ft.TextField(
            label=label,
            hint_text=hint,
            value=_format_number(value),
            width=110,
            keyboard_type=ft.KeyboardType.NUMBER,
        )

        def stored() -> Optional[Number]:
            subject = session.get(subject_id)
            return read(subject) if subject is not None else None

        def on_change(e: ft.ControlEvent) -> None:
            text = field.value or ""
            edit(subject_id, text)
            # a rejected edit puts the last accepted value back in the box
            if text.strip() and not _shows(stored(), text) and parse_number(text) is not None:
                field.value = _format_number(stored())
                page.update()

        def on_blur(e: ft.ControlEvent) -> None:
            if not _shows(stored(), field.value or ""):
                field.value = _format_number(stored())
                page.update()

        field.on_change = on_change
        field.on_blur = on_blur
        field.on_submit = lambda _: on_enter(index)
        return field

    def build_row(index: int, subject: Subject) -> ft.Control:
        subject_id = subject.id

        name = ft.TextField(
            label="Subject",
            hint_text="e.g., Artificial Intelligence",
            value=subject.name,
            expand=True,
            on_change=lambda e: session.edit_name(subject_id, e.control.value or ""),
            on_submit=lambda _: on_enter(index),
        )
        credits = numeric_field(
            "Credits", subject_id, subject.credits, session.edit_credits, lambda s: s.credits, index
        )
        marks = numeric_field(
            "Marks", subject_id, subject.marks, session.edit_marks, lambda s: s.marks, index, hint="0-100"
        )

        badge = ft.Container(
            width=80,
            padding=ft.padding.symmetric(horizontal=10, vertical=6),
            border_radius=6,
            alignment=ft.alignment.center,
        )
        _paint_badge(badge, subject.grade)
        badges[subject_id] = badge

        def on_clear(_):
            if session.clear_subject(subject_id):
                name.value = ""
                marks.value = ""
                page.update()

        name_fields.append(name)
        return ft.Row(
            controls=[
                name,
                credits,
                marks,
                badge,
                ft.IconButton(icon=ft.Icons.CLOSE, tooltip="Clear", on_click=on_clear),
                ft.IconButton(
                    icon=ft.Icons.DELETE,
                    tooltip="Remove",
                    disabled=len(session.subjects) <= 1,
                    on_click=lambda _: session.remove_subject(subject_id),
                ),
            ],
            vertical_alignment=ft.CrossAxisAlignment.CENTER,
        )

    def render_rows() -> None:
        rows_column.controls.clear()
        rendered_ids.clear()
        name_fields.clear()
        badges.clear()
        for index, subject in enumerate(session.subjects):
            rows_column.controls.append(build_row(index, subject))
            rendered_ids.append(subject.id)

    def on_session_change(_: SessionState) -> None:
        if rendered_ids != [s.id for s in session.subjects]:
            render_rows()
        refresh_summary()
        refresh_badges()
        reset_button.disabled = session.is_pristine
        page.update()

    def close_dialog(_) -> None:
        page.close(reset_dialog)

    def confirm_reset(_) -> None:
        page.close(reset_dialog)
        session.reset()

    reset_dialog = ft.AlertDialog(
        modal=True,
        title=ft.Text("Are you absolutely sure?"),
        content=ft.Text("This clears every subject and mark you have entered."),
        actions=[
            ft.TextButton("Cancel", on_click=close_dialog),
            ft.TextButton("Continue", on_click=confirm_reset),
        ],
        actions_alignment=ft.MainAxisAlignment.END,
    )

    reset_button = ft.Button(
        "Reset All",
        icon=ft.Icons.RESTART_ALT,
        disabled=session.is_pristine,
        on_click=lambda _: page.open(reset_dialog),
    )

    def on_add(_) -> None:
        session.add_subject()
        page.update()
        focus_row(len(name_fields) - 1)

    session.subscribe(on_session_change)
    render_rows()
    refresh_summary()

    return ft.View(
        route="/",
        scroll=ft.ScrollMode.AUTO,
        controls=[
            ft.AppBar(title=ft.Text("Grade Calculator")),
            ft.Container(
                padding=20,
                content=ft.Column(
                    controls=[
                        ft.Text(
                            "Calculate your Semester Grade Point Average (SGPA) with ease.",
                            color=ft.Colors.GREY_700,
                        ),
                        ft.Row(
                            controls=[
                                _summary_card("SGPA", sgpa_text, sgpa_bar),
                                _summary_card("Percentage", percentage_text),
                                _summary_card("Total Credits", credits_text),
                            ],
                            wrap=True,
                        ),
                        ft.Divider(),
                        ft.Text("Subjects", size=20, weight=ft.FontWeight.BOLD),
                        rows_column,
                        ft.Row(
                            controls=[
                                ft.OutlinedButton("Add Subject", icon=ft.Icons.ADD, on_click=on_add),
                                reset_button,
                            ]
                        ),
                        ft.Divider(),
                        ft.Text("Grading Scale", size=20, weight=ft.FontWeight.BOLD),
                        _grading_scale(),
                    ],
                ),
            ),
        ],
    )
