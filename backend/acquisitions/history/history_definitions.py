"""
Year 5 history curriculum catalog and analysis section definitions
"""

HISTORY_LEVEL = "5AP"
HISTORY_SUBJECT = "تاريخ"

GENERAL_HISTORY = "general_history"
NATIONAL_HISTORY = "national_history"

# Criterion 1 of national history: causes of the French occupation
CAUSES_CRITERION = 1

YEAR5_HISTORY_DEF = {
    "id": "history_y5",
    "label": "التاريخ (السنة الخامسة)",
    "competencies": [
        {
            "id": GENERAL_HISTORY,
            "label": "فهم التحولات في التاريخ العام",
            "criteria": [
                {"id": 1, "label": "تمييز العصور التاريخية"},
                {"id": 2, "label": "إدراك العلاقة بين التحولات الاقتصادية والحركة الاستعمارية"},
                {"id": 3, "label": "إبراز انعكاسات الاستعمار الأوروبي الحديث"},
            ],
        },
        {
            "id": NATIONAL_HISTORY,
            "label": "تأصيل التاريخ الوطني",
            "criteria": [
                {"id": 1, "label": "إدراك أسباب الاحتلال الفرنسي للجزائر"},
                {"id": 2, "label": "استيعاب الإطار الزماني والمكاني للمقاومة وطبيعتها"},
                {"id": 3, "label": "فهم اتجاهات النضال السياسي وأساليبه"},
                {"id": 4, "label": "استيعاب المراحل الكبرى للثورة التحريرية"},
            ],
        },
    ],
}

# ---------------------------------------------------------------------
# Analysis sections
# ---------------------------------------------------------------------
SECTION_IDENTITY_INDEX = "identityIndex"
SECTION_CHRONO_AWARENESS = "chronoAwareness"
SECTION_NATIONAL_DEPTH = "nationalDepth"
SECTION_CROSS_LANG = "crossLang"

ANALYSIS_SECTIONS = [
    SECTION_IDENTITY_INDEX,
    SECTION_CHRONO_AWARENESS,
    SECTION_NATIONAL_DEPTH,
    SECTION_CROSS_LANG,
]

METRIC_DEFINITIONS = {
    SECTION_IDENTITY_INDEX: {
        "title": "مؤشر الهوية والانتماء",
        "concept": "يقيس مدى تشبع المتعلم بالتاريخ الوطني (المقاومة والثورة) كركيزة أساسية لبناء الشخصية الوطنية.",
        "method": "حساب معدل التحكم في الكفاءة الثانية (تأصيل التاريخ الوطني) التي تضم 4 معايير.",
    },
    SECTION_CHRONO_AWARENESS: {
        "title": "الوعي الزمني (التاريخ العام)",
        "concept": "قدرة المتعلم على التموقع في الزمن وفهم التحولات الكبرى (العصور، الاستعمار).",
        "method": "حساب معدل التحكم في الكفاءة الأولى (فهم التحولات في التاريخ العام).",
    },
    SECTION_NATIONAL_DEPTH: {
        "title": "عمق الفهم التاريخي",
        "concept": "تحليل جودة اكتساب المعارف التاريخية: هل هي مجرد حفظ للأحداث أم فهم للأسباب والنتائج (مثل أسباب الاحتلال)؟",
        "method": "تحليل نتائج المعيار الأول من الكفاءة الثانية (إدراك أسباب الاحتلال).",
    },
    SECTION_CROSS_LANG: {
        "title": "مصفوفة العائق اللغوي",
        "concept": "التاريخ يُدرس ويُقوم باللغة العربية. هذا المؤشر يكشف إن كان ضعف التلميذ في التاريخ سببه 'تاريخي' أم 'لغوي' (عجز عن قراءة السند).",
        "method": "تقاطع معدل 'القراءة العربية' (محور السينات) مع معدل 'التاريخ' (محور العينات) لتصنيف التلاميذ.",
    },
}
