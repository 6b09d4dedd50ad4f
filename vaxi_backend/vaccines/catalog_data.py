"""
Reference vaccine catalog used by ``manage.py seed``.

``offsets`` (days from birth per dose) are written to ``VaccineDoseOffset``;
vaccines without them are scheduled from their ``when_to_give`` text.
"""

VACCINE_CATALOG = [
    {
        "name": "BCG",
        "type": "Mandatory",
        "category": "Child",
        "sub_category": "Birth",
        "min_age_months": 0,
        "max_age_months": 12,
        "total_doses": 1,
        "frequency": "Once",
        "when_to_give": "At birth",
        "dose": "0.1 ml",
        "route": "Intradermal",
        "site": "Left Upper Arm",
        "notes": "Protects against severe forms of tuberculosis",
    },
    {
        "name": "Hepatitis B",
        "type": "Mandatory",
        "category": "Child",
        "sub_category": "Birth",
        "min_age_months": 0,
        "max_age_months": None,
        "total_doses": 3,
        "frequency": "Three doses",
        "when_to_give": "At birth, 6 weeks, 14 weeks",
        "dose": "0.5 ml",
        "route": "Intramuscular",
        "site": "Anterolateral Thigh",
        "notes": "First dose within 24 hours of birth",
        "offsets": [0, 42, 98],
    },
    {
        "name": "OPV",
        "type": "Mandatory",
        "category": "Child",
        "sub_category": "Infant",
        "min_age_months": 0,
        "max_age_months": 60,
        "total_doses": 4,
        "frequency": "Four doses",
        "when_to_give": "At birth, 6 weeks, 10 weeks and 14 weeks",
        "dose": "2 drops",
        "route": "Oral",
        "site": "Mouth",
        "notes": "Oral polio vaccine",
    },
    {
        "name": "Pentavalent (DTwP-HepB-Hib)",
        "type": "Mandatory",
        "category": "Child",
        "sub_category": "Infant",
        "min_age_months": 1,
        "max_age_months": 12,
        "total_doses": 3,
        "frequency": "Three doses",
        "when_to_give": "6, 10 and 14 weeks",
        "dose": "0.5 ml",
        "route": "Intramuscular",
        "site": "Anterolateral Thigh",
        "notes": "Diphtheria, tetanus, pertussis, hepatitis B and Hib",
    },
    {
        "name": "Rotavirus",
        "type": "Mandatory",
        "category": "Child",
        "sub_category": "Infant",
        "min_age_months": 1,
        "max_age_months": 8,
        "total_doses": 3,
        "frequency": "Three doses",
        "when_to_give": "6, 10 and 14 weeks",
        "dose": "5 drops",
        "route": "Oral",
        "site": "Mouth",
        "notes": "Do not start after 15 weeks of age",
    },
    {
        "name": "Pneumococcal Conjugate (PCV)",
        "type": "Mandatory",
        "category": "Child",
        "sub_category": "Infant",
        "min_age_months": 1,
        "max_age_months": 24,
        "total_doses": 3,
        "frequency": "Two primary doses + booster",
        "when_to_give": "6 weeks, 14 weeks and booster at 9 months",
        "dose": "0.5 ml",
        "route": "Intramuscular",
        "site": "Anterolateral Thigh",
        "notes": "Protects against pneumococcal pneumonia and meningitis",
    },
    {
        "name": "Measles-Rubella (MR)",
        "type": "Mandatory",
        "category": "Child",
        "sub_category": "Infant",
        "min_age_months": 9,
        "max_age_months": 60,
        "total_doses": 2,
        "frequency": "Two doses",
        "when_to_give": "9-12 months and 16-24 months",
        "dose": "0.5 ml",
        "route": "Subcutaneous",
        "site": "Right Upper Arm",
        "notes": "",
    },
    {
        "name": "DPT Booster",
        "type": "Mandatory",
        "category": "Child",
        "sub_category": "Toddler",
        "min_age_months": 16,
        "max_age_months": 84,
        "total_doses": 2,
        "frequency": "Two boosters",
        "when_to_give": "16-24 months and 5-6 years",
        "dose": "0.5 ml",
        "route": "Intramuscular",
        "site": "Anterolateral Thigh",
        "notes": "",
    },
    {
        "name": "Typhoid Conjugate",
        "type": "Optional",
        "category": "Child",
        "sub_category": "Optional",
        "min_age_months": 9,
        "max_age_months": None,
        "total_doses": 1,
        "frequency": "Once",
        "when_to_give": "At 9 months or later",
        "dose": "0.5 ml",
        "route": "Intramuscular",
        "site": "Deltoid",
        "notes": "",
    },
    {
        "name": "Hepatitis A",
        "type": "Optional",
        "category": "Child",
        "sub_category": "Optional",
        "min_age_months": 12,
        "max_age_months": None,
        "total_doses": 2,
        "frequency": "Two doses",
        "when_to_give": "12 months and 18 months",
        "dose": "0.5 ml",
        "route": "Intramuscular",
        "site": "Deltoid",
        "notes": "",
    },
    {
        "name": "Varicella",
        "type": "Optional",
        "category": "Child",
        "sub_category": "Optional",
        "min_age_months": 15,
        "max_age_months": None,
        "total_doses": 2,
        "frequency": "Two doses",
        "when_to_give": "15 months and 4-6 years",
        "dose": "0.5 ml",
        "route": "Subcutaneous",
        "site": "Upper Arm",
        "notes": "",
    },
    {
        "name": "HPV",
        "type": "Optional",
        "category": "Adolescent",
        "sub_category": "Optional",
        "min_age_months": 108,
        "max_age_months": 540,
        "total_doses": 2,
        "frequency": "Two doses",
        "when_to_give": "9 years, second dose after 6 months",
        "dose": "0.5 ml",
        "route": "Intramuscular",
        "site": "Deltoid",
        "notes": "",
    },
    {
        "name": "Influenza",
        "type": "Optional",
        "category": "All Ages",
        "sub_category": "Seasonal",
        "min_age_months": 6,
        "max_age_months": None,
        "total_doses": 1,
        "frequency": "Annual",
        "when_to_give": "Every year before flu season",
        "dose": "0.5 ml",
        "route": "Intramuscular",
        "site": "Deltoid",
        "notes": "",
    },
    {
        "name": "Td (Tetanus-Diphtheria)",
        "type": "Mandatory",
        "category": "Adult",
        "sub_category": "Booster",
        "min_age_months": 120,
        "max_age_months": None,
        "total_doses": 1,
        "frequency": "Every 10 years",
        "when_to_give": "10 years, then every 10 years",
        "dose": "0.5 ml",
        "route": "Intramuscular",
        "site": "Deltoid",
        "notes": "",
    },
    {
        "name": "Dengue Vaccine",
        "type": "Optional",
        "category": "Child",
        "sub_category": "Optional",
        "min_age_months": 72,
        "max_age_months": 216,
        "total_doses": 3,
        "frequency": "Three doses",
        "when_to_give": "First dose at 9 years, second after 6 months, third after 6 months",
        "dose": "0.5 ml",
        "route": "Subcutaneous",
        "site": "Upper Arm",
        "notes": "Protects against dengue fever in endemic areas",
    },
    {
        "name": "Meningitis B",
        "type": "Optional",
        "category": "Child",
        "sub_category": "Optional",
        "min_age_months": 60,
        "max_age_months": 1200,
        "total_doses": 2,
        "frequency": "Two doses",
        "when_to_give": "First dose at 5 years, second dose after 2 months",
        "dose": "0.5 ml",
        "route": "Intramuscular",
        "site": "Deltoid",
        "notes": "Protects against Meningitis B infection",
    },
    {
        "name": "Hepatitis E",
        "type": "High-risk",
        "category": "Adult",
        "sub_category": "Optional",
        "min_age_months": 216,
        "max_age_months": 1200,
        "total_doses": 3,
        "frequency": "Three doses",
        "when_to_give": "0, 1, and 6 months schedule",
        "dose": "0.5 ml",
        "route": "Intramuscular",
        "site": "Deltoid",
        "notes": "Recommended for pregnant women and high-risk adults",
    },
    {
        "name": "Tick-borne Encephalitis",
        "type": "Travel",
        "category": "Travel",
        "sub_category": "Optional",
        "min_age_months": 36,
        "max_age_months": 1200,
        "total_doses": 3,
        "frequency": "Primary series + booster",
        "when_to_give": "0, 1-3 months, and 9-12 months, booster every 3-5 years",
        "dose": "0.5 ml",
        "route": "Intramuscular",
        "site": "Deltoid",
        "notes": "Required for travel to endemic areas in Europe and Asia",
    },
    {
        "name": "Japanese Encephalitis (Adult)",
        "type": "Travel",
        "category": "Travel",
        "sub_category": "Optional",
        "min_age_months": 216,
        "max_age_months": 1200,
        "total_doses": 2,
        "frequency": "Two doses",
        "when_to_give": "First dose, second dose after 28 days",
        "dose": "0.5 ml",
        "route": "Intramuscular",
        "site": "Deltoid",
        "notes": "Required for travel to endemic areas in Asia",
    },
]
