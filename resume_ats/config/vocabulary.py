"""
Static lookup tables used by the parser and the scorer.

Extend these tables to teach the parser new headings or the scorer new
verbs; the control flow in the services never names an entry directly.
"""

from typing import Dict, List


# Section key -> heading synonyms (compared after lower-casing, trimming
# trailing punctuation and replacing "&" with "and")
SECTION_SYNONYMS: Dict[str, List[str]] = {
    "summary": [
        "summary", "professional summary", "career summary", "executive summary",
        "summary of qualifications", "objective", "career objective", "profile",
        "professional profile", "about me", "about",
    ],
    "experience": [
        "experience", "work experience", "professional experience", "relevant experience",
        "work history", "employment", "employment history", "career history",
        "relevant work experience",
    ],
    "education": [
        "education", "academic background", "academic history", "academics",
        "education and training", "qualifications", "academic qualifications",
    ],
    "skills": [
        "skills", "technical skills", "core skills", "key skills", "core competencies",
        "competencies", "expertise", "areas of expertise", "proficiencies",
        "skills and tools", "technologies",
    ],
    "certifications": [
        "certifications", "certification", "certificates", "licenses",
        "licenses and certifications", "certifications and licenses", "credentials",
        "professional development",
    ],
    "projects": [
        "projects", "personal projects", "key projects", "selected projects",
        "academic projects", "portfolio",
    ],
    "languages": [
        "languages", "language skills", "language proficiency", "spoken languages",
    ],
}

HEADER_LOOKUP: Dict[str, str] = {
    synonym: section
    for section, synonyms in SECTION_SYNONYMS.items()
    for synonym in synonyms
}

# Words that open a résumé but are never part of the candidate's name
NAME_STOPWORDS = {"resume", "résumé", "curriculum", "vitae", "cv", "profile", "contact"}

DEGREE_KEYWORDS: List[str] = [
    r"bachelor(?:'?s)?", r"master(?:'?s)?", r"ph\.?\s?d\.?", r"doctor(?:ate)?", r"associate(?:'?s)?",
    r"diploma", r"b\.?\s?sc\.?", r"m\.?\s?sc\.?", r"b\.?\s?tech\.?", r"m\.?\s?tech\.?",
    r"b\.?s\.?", r"b\.?a\.?", r"m\.?s\.?", r"m\.?a\.?", r"m\.?b\.?a\.?", r"b\.?e\.?",
    r"b\.?eng\.?", r"m\.?eng\.?", r"ged",
]

INSTITUTION_KEYWORDS: List[str] = [
    "university", "college", "institute", "school", "academy", "polytechnic",
]

# Accepted as the trailing part of "City, <Country>" locations
COUNTRIES = {
    "usa", "us", "united states", "uk", "united kingdom", "canada", "india", "germany",
    "france", "spain", "italy", "netherlands", "ireland", "australia", "new zealand",
    "singapore", "japan", "brazil", "mexico", "sweden", "switzerland", "poland",
    "portugal", "israel", "nigeria", "kenya", "south africa", "uae",
}

REMOTE_WORDS = {"remote", "hybrid", "on-site", "onsite"}

LANGUAGE_PROFICIENCY: Dict[str, str] = {
    "native": "native",
    "mother tongue": "native",
    "bilingual": "native",
    "fluent": "fluent",
    "advanced": "professional",
    "professional": "professional",
    "proficient": "professional",
    "intermediate": "conversational",
    "conversational": "conversational",
    "basic": "basic",
    "elementary": "basic",
    "beginner": "basic",
}

# Industry-neutral action verbs credited by the keywords check
ACTION_VERBS: List[str] = [
    "accelerated", "accomplished", "achieved", "administered", "analyzed", "automated",
    "built", "collaborated", "coordinated", "created", "decreased", "delivered",
    "designed", "developed", "drove", "enhanced", "established", "executed",
    "expanded", "generated", "grew", "implemented", "improved", "increased",
    "initiated", "launched", "led", "managed", "mentored", "negotiated",
    "optimized", "orchestrated", "organized", "pioneered", "planned", "produced",
    "reduced", "resolved", "saved", "scaled", "spearheaded", "streamlined",
    "strengthened", "supervised", "trained", "transformed", "upgraded",
]

# Nouns that make a bare number read as a measurable count
COUNT_NOUNS: List[str] = [
    "users", "customers", "clients", "people", "employees", "engineers", "members",
    "projects", "teams", "stores", "countries", "markets", "accounts", "partners",
    "students", "requests", "transactions", "servers", "services", "hours", "days",
    "weeks", "months", "deals", "leads", "products", "features", "applications",
]

GRADE_SUMMARIES: Dict[str, str] = {
    "A": "Excellent! Your resume scores {percentage}% on ATS compatibility. "
         "It's well-optimized for applicant tracking systems.",
    "B": "Great job! Your resume scores {percentage}% on ATS compatibility. "
         "With a few improvements, it could be even stronger.",
    "C": "Good progress! Your resume scores {percentage}% on ATS compatibility. "
         "Focus on the suggested improvements to increase your chances.",
    "D": "Your resume needs work. It scores {percentage}% on ATS compatibility. "
         "Review the suggestions below to improve.",
    "F": "Your resume scores {percentage}% on ATS compatibility. Significant "
         "improvements are needed for better results with applicant tracking systems.",
}
