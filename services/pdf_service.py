"""
Combined plan PDF rendering.

Builds a single A4 document holding the patient card, the professional
that signs the plans, and whichever of the diet and workout plans were
selected. Labels are in Spanish, as delivered to patients.
"""

import io
import logging
import re
from datetime import date
from typing import Iterable, Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import (
    HRFlowable,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from app.config import settings
from app.exceptions import PdfGenerationError
from domain.enums import DayOfWeek, MealType
from domain.models import DietMeal, DietPlan, Patient, Professional, WorkoutDay, WorkoutPlan
from repositories import meal_sort_key

logger = logging.getLogger("nutritrack.services.pdf")

PRIMARY = colors.HexColor("#4F46E5")
SECONDARY_HEX = "#6366F1"
SECONDARY = colors.HexColor(SECONDARY_HEX)
TEXT = colors.HexColor("#1F2937")
LIGHT = colors.HexColor("#F3F4F6")

DAY_LABELS = {
    DayOfWeek.MONDAY: "Lunes",
    DayOfWeek.TUESDAY: "Martes",
    DayOfWeek.WEDNESDAY: "Miércoles",
    DayOfWeek.THURSDAY: "Jueves",
    DayOfWeek.FRIDAY: "Viernes",
    DayOfWeek.SATURDAY: "Sábado",
    DayOfWeek.SUNDAY: "Domingo",
}

MEAL_LABELS = {
    MealType.BREAKFAST: "Desayuno",
    MealType.MID_MORNING_SNACK: "Media mañana",
    MealType.LUNCH: "Almuerzo",
    MealType.AFTERNOON_SNACK: "Merienda",
    MealType.DINNER: "Cena",
}

PROFESSION_LABELS = {
    "NUTRITIONIST": "Nutricionista",
    "TRAINER": "Entrenador Personal",
}

NOT_SPECIFIED = "No especificado"


def generate_file_name(patient: Patient, on: Optional[date] = None) -> str:
    """<First>_<Last>_plan_<YYYY-MM-DD>.pdf, whitespace collapsed to underscores"""
    name = re.sub(r"\s+", "_", f"{patient.first_name}_{patient.last_name}")
    return f"{name}_plan_{(on or date.today()).isoformat()}.pdf"


def _format_date(value: Optional[date]) -> str:
    return value.strftime("%d/%m/%Y") if value else NOT_SPECIFIED


def _age(birth_date: date, today: Optional[date] = None) -> int:
    today = today or date.today()
    return today.year - birth_date.year - (
        (today.month, today.day) < (birth_date.month, birth_date.day)
    )


class _Styles:
    def __init__(self):
        base = getSampleStyleSheet()
        self.title = ParagraphStyle(
            "NTTitle", parent=base["Title"], textColor=PRIMARY, fontSize=26, leading=30
        )
        self.subtitle = ParagraphStyle(
            "NTSubtitle", parent=base["Heading2"], textColor=SECONDARY, alignment=1
        )
        self.section = ParagraphStyle(
            "NTSection", parent=base["Heading2"], textColor=PRIMARY, alignment=1
        )
        self.heading = ParagraphStyle(
            "NTHeading", parent=base["Heading3"], textColor=SECONDARY
        )
        self.body = ParagraphStyle(
            "NTBody", parent=base["BodyText"], textColor=TEXT, fontSize=11, leading=14
        )
        self.note = ParagraphStyle(
            "NTNote", parent=self.body, fontName="Helvetica-Oblique", fontSize=9
        )
        self.footer = ParagraphStyle(
            "NTFooter", parent=base["BodyText"], textColor=SECONDARY, fontSize=9, alignment=1
        )


def _field(styles: _Styles, label: str, value) -> Paragraph:
    return Paragraph(
        f'<font color="{SECONDARY_HEX}">'
        f"<b>{escape(label)}:</b></font> {escape(str(value))}",
        styles.body,
    )


def _section_banner(styles: _Styles, title: str) -> Table:
    banner = Table([[Paragraph(escape(title), styles.section)]], colWidths=[460])
    banner.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, -1), LIGHT),
                ("BOX", (0, 0), (-1, -1), 1, PRIMARY),
                ("TOPPADDING", (0, 0), (-1, -1), 6),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
            ]
        )
    )
    return banner


def _patient_block(styles: _Styles, patient: Patient) -> list:
    elements = [
        _section_banner(styles, "INFORMACIÓN DEL PACIENTE"),
        Spacer(1, 8),
        _field(styles, "Nombre", f"{patient.first_name} {patient.last_name}"),
        _field(styles, "Email", patient.email or NOT_SPECIFIED),
        _field(styles, "Teléfono", patient.phone or NOT_SPECIFIED),
    ]
    if patient.birth_date:
        elements.append(_field(styles, "Edad", f"{_age(patient.birth_date)} años"))
    if patient.height:
        elements.append(_field(styles, "Altura", f"{patient.height} cm"))
    if patient.gender:
        elements.append(_field(styles, "Género", patient.gender))
    if patient.objectives:
        elements.append(_field(styles, "Objetivos", patient.objectives))
    if patient.diet_restrictions:
        elements.append(_field(styles, "Restricciones dietéticas", patient.diet_restrictions))
    return elements


def _professional_block(styles: _Styles, professional: Professional) -> list:
    profession = getattr(professional.profession, "value", professional.profession)
    return [
        Spacer(1, 10),
        _field(
            styles,
            "Profesional",
            f"{professional.first_name} {professional.last_name} "
            f"({PROFESSION_LABELS.get(profession, profession)})",
        ),
    ]


def _plan_header(styles: _Styles, banner: str, plan) -> list:
    elements = [
        Spacer(1, 16),
        _section_banner(styles, banner),
        Spacer(1, 8),
        Paragraph(f"<b>{escape(plan.title)}</b>", styles.heading),
    ]
    if plan.description:
        elements.append(_field(styles, "Descripción", plan.description))
    if plan.start_date or plan.end_date:
        elements.append(
            _field(
                styles,
                "Período",
                f"{_format_date(plan.start_date)} - {_format_date(plan.end_date)}",
            )
        )
    if plan.objectives:
        elements.append(_field(styles, "Objetivos", plan.objectives))
    return elements


def _diet_block(styles: _Styles, plan: DietPlan, meals: Iterable[DietMeal]) -> list:
    elements = _plan_header(styles, "PLAN DE ALIMENTACIÓN", plan)
    elements.append(Paragraph("COMIDAS POR DÍA", styles.heading))

    rows = [["Día", "Comida", "Contenido"]]
    last_day = None
    for meal in sorted(meals, key=meal_sort_key):
        day = DayOfWeek(meal.day_of_week)
        rows.append(
            [
                DAY_LABELS[day] if day != last_day else "",
                MEAL_LABELS[MealType(meal.meal_type)],
                Paragraph(escape(meal.content), styles.body),
            ]
        )
        last_day = day

    if len(rows) == 1:
        elements.append(Paragraph("Sin comidas registradas.", styles.note))
        return elements

    table = Table(rows, colWidths=[80, 100, 280], repeatRows=1)
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), PRIMARY),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
                ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
            ]
        )
    )
    elements.append(table)
    return elements


def _workout_block(styles: _Styles, plan: WorkoutPlan, days: Iterable[WorkoutDay]) -> list:
    elements = _plan_header(styles, "PLAN DE ENTRENAMIENTO", plan)
    elements.append(Paragraph("RUTINA SEMANAL", styles.heading))
    for day in days:
        elements.append(
            Paragraph(f"<b>{DAY_LABELS[DayOfWeek(day.day_of_week)].upper()}</b>", styles.body)
        )
        if day.description:
            elements.append(Paragraph(escape(day.description), styles.note))
        for index, exercise in enumerate(day.exercises, start=1):
            line = f"{index}. <b>{escape(exercise.name)}</b>"
            if exercise.sets_reps:
                line += f" - {escape(exercise.sets_reps)}"
            elements.append(Paragraph(line, styles.body))
            if exercise.observations:
                elements.append(
                    Paragraph(f"Nota: {escape(exercise.observations)}", styles.note)
                )
        elements.append(Spacer(1, 6))
    return elements


def generate_combined_plans_pdf(
    patient: Patient,
    professional: Optional[Professional] = None,
    diet_plan: Optional[DietPlan] = None,
    diet_meals: Iterable[DietMeal] = (),
    workout_plan: Optional[WorkoutPlan] = None,
    workout_days: Iterable[WorkoutDay] = (),
) -> bytes:
    """
    Render the combined document and return the raw PDF bytes.

    Raises:
        PdfGenerationError: reportlab failed to lay out or write the document
    """
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=A4,
        rightMargin=50,
        leftMargin=50,
        topMargin=50,
        bottomMargin=50,
        title=f"Plan de {patient.first_name} {patient.last_name}",
        author=settings.email_from_name,
        subject="Plan de Dieta y Entrenamiento",
        creator=settings.email_from_name,
    )
    styles = _Styles()

    elements = [
        Paragraph("NUTRITRACK PRO", styles.title),
        Paragraph("PLAN PERSONALIZADO", styles.subtitle),
        Spacer(1, 20),
    ]
    elements += _patient_block(styles, patient)
    if professional is not None:
        elements += _professional_block(styles, professional)
    if diet_plan is not None:
        elements += _diet_block(styles, diet_plan, diet_meals)
    if workout_plan is not None:
        elements += _workout_block(styles, workout_plan, workout_days)

    elements += [
        Spacer(1, 24),
        HRFlowable(width="80%", thickness=2, color=SECONDARY),
        Spacer(1, 6),
        Paragraph(
            f"Generado por {escape(settings.email_from_name)} el "
            f"{date.today().strftime('%d/%m/%Y')}",
            styles.footer,
        ),
    ]

    try:
        doc.build(elements)
    except Exception as exc:
        logger.exception("PDF build failed for patient %s", patient.id)
        raise PdfGenerationError(details={"reason": str(exc)}) from exc

    pdf = buf.getvalue()
    logger.info("PDF generated for patient %s (%d bytes)", patient.id, len(pdf))
    return pdf
