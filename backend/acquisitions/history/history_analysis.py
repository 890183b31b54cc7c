"""
Narrative analysis for the Year 5 history dashboard

Default text is generated from the indicators. Inspectors may replace it
per section and per display context; those overrides live in an
AnalysisOverrideStore that the host can back with its own storage.
"""

from typing import Dict, MutableMapping, Optional

from .. import helper_functions as hf
from .history_definitions import (
    SECTION_CHRONO_AWARENESS,
    SECTION_CROSS_LANG,
    SECTION_IDENTITY_INDEX,
    SECTION_NATIONAL_DEPTH,
)

ANALYSIS_FIELDS = ("reading", "diagnosis", "recommendation")

IDENTITY_GOOD_THRESHOLD = 60
DEPTH_GOOD_THRESHOLD = 50


def _empty_analysis():
    return {field: "" for field in ANALYSIS_FIELDS}


def default_analysis(section: str, indicators: dict) -> Dict[str, str]:
    """Generated reading/diagnosis/recommendation for one section"""
    if section == SECTION_IDENTITY_INDEX:
        value = indicators.get("identity_index", 0.0)
        return {
            "reading": f"مؤشر التحكم في كفاءة التأصيل الوطني بلغ {value:.1f}%.",
            "diagnosis": (
                "مستوى جيد يعكس نجاح المدرسة في ترسيخ الوعي التاريخي الوطني."
                if value > IDENTITY_GOOD_THRESHOLD
                else "مؤشر منخفض يستدعي مراجعة طرائق تقديم أحداث الثورة والمقاومة."
            ),
            "recommendation": "تعزيز الدروس بالشرائط الوثائقية والزيارات الميدانية للمتاحف لربط المتعلم بتاريخه عاطفياً.",
        }

    if section == SECTION_CHRONO_AWARENESS:
        value = indicators.get("chrono_awareness", 0.0)
        return {
            "reading": f"نسبة التحكم في فهم التحولات التاريخية العامة هي {value:.1f}%.",
            "diagnosis": "هذه الكفاءة تتطلب قدرة على التجريد (العصور، الاستعمار). انخفاضها يدل على صعوبة في تخيل الزمن الطويل.",
            "recommendation": "استخدام الخرائط التاريخية والسلالم الزمنية (Frise Chronologique) بشكل دائم في القسم.",
        }

    if section == SECTION_NATIONAL_DEPTH:
        value = indicators.get("depth", 0.0)
        return {
            "reading": f"نسبة الإدراك العميق لأسباب الأحداث التاريخية هي {value:.1f}%.",
            "diagnosis": (
                "التلاميذ يتجاوزون السرد إلى التحليل والتعليل."
                if value > DEPTH_GOOD_THRESHOLD
                else "غلبة الحفظ الصم للأحداث دون فهم دوافعها (لماذا احتلت فرنسا الجزائر؟)."
            ),
            "recommendation": "اعتماد منهجية 'الوضعية المشكلة' في التاريخ بدلاً من السرد الإلقائي.",
        }

    if section == SECTION_CROSS_LANG:
        gap = indicators.get("cross_subject_gap")
        if not indicators.get("cross_subject_available") or gap is None:
            return {"reading": "لا توجد بيانات مشتركة.", "diagnosis": "", "recommendation": ""}
        return {
            "reading": f"متوسط الفارق بين كفاءة القراءة (عربية) والتحصيل في التاريخ هو {gap:.1f} نقطة.",
            "diagnosis": (
                "ارتباط وثيق. تحسن مستوى اللغة ينعكس إيجاباً على التاريخ."
                if gap < hf.GAP_THRESHOLD
                else "وجود 'عائق لغوي'. التلميذ قد يفشل في التاريخ ليس لعدم فهم الأحداث، بل لعجزه عن قراءة السندات وفهم المصطلحات."
            ),
            "recommendation": "تدريب التلاميذ على قراءة السندات التاريخية في حصص اللغة العربية (نصوص تاريخية).",
        }

    return _empty_analysis()


def analysis_context_id(context_name: str, scope: str) -> str:
    """Key of a display context, e.g. "المقاطعة_district"."""
    return f"{context_name}_{scope}"


class AnalysisOverrideStore:
    """
    User-authored analysis text keyed by (section, context_id).

    `backing` is any mutable mapping (a dict by default). Keys in the
    mapping are "<context_id>::<section>" strings so it can be dumped to
    JSON as-is.
    """

    def __init__(self, backing: Optional[MutableMapping] = None):
        self._data = backing if backing is not None else {}

    @staticmethod
    def _key(section: str, context_id: str) -> str:
        return f"{context_id}::{section}"

    def get(self, section: str, context_id: str) -> Optional[Dict[str, str]]:
        return self._data.get(self._key(section, context_id))

    def save(self, section: str, context_id: str, content: dict) -> Dict[str, str]:
        """Store an override. Missing fields are saved as empty strings."""
        if not isinstance(content, dict):
            raise ValueError(f"analysis content must be a dict, got {type(content).__name__}")
        clean = {field: str(content.get(field) or "") for field in ANALYSIS_FIELDS}
        self._data[self._key(section, context_id)] = clean
        return clean

    def reset(self, section: str, context_id: str) -> bool:
        """Drop an override; returns whether one existed."""
        return self._data.pop(self._key(section, context_id), None) is not None

    def export(self, context_id: str) -> Dict[str, Dict[str, str]]:
        """All overrides of one context, keyed by section"""
        prefix = f"{context_id}::"
        return {k[len(prefix):]: v for k, v in self._data.items() if k.startswith(prefix)}


def resolve_analysis(section, indicators, store=None, context_id=None):
    """Override text when one is stored, else the generated default"""
    if store is not None and context_id is not None:
        override = store.get(section, context_id)
        if override is not None:
            return override
    return default_analysis(section, indicators)
