"""
Centralized constants shared by the views: roles, menu structure,
answer letters, personality dichotomies and preference keys.
"""

ROLE_GUIDANCE = "guidance"
ROLE_EVALUATOR = "evaluator"

# Answer letters map to option1..option5
ANSWER_LETTERS = ["A", "B", "C", "D", "E"]

# Four axes of the personality questionnaire and their (positive, negative) sides
DICHOTOMIES = {
    "E/I": ("E", "I"),
    "S/N": ("S", "N"),
    "T/F": ("T", "F"),
    "J/P": ("J", "P"),
}

PER_PAGE_OPTIONS = [10, 20, 50, 100]

SORT_OPTIONS = {"latest": "Latest first", "oldest": "Oldest first"}

# A result counts as passed from this score upward (dashboard analytics)
PASS_SCORE = 10

DEFAULT_PASSING_RATE = 80

# Persisted UI preferences (one owner each)
PREF_SIDEBAR_COLLAPSED = "sidebarCollapsed"
PREF_COURSE_TABLE_MINIMIZED = "courseManagement_tableMinimized"
PREF_QUESTION_BANK_TABLE_MINIMIZED = "questionBankTableMinimized"

# Sidebar menu groups per role. Each item: (page key, label)
GUIDANCE_MENU = [
    ("Overview", [("guidance_dashboard", "Dashboard")]),
    ("Content Management", [
        ("guidance_question_bank", "Question Bank"),
        ("guidance_question_builder", "Question Builder"),
        ("guidance_archived_questions", "Archived Questions"),
        ("guidance_courses", "Courses"),
        ("guidance_personality", "Personality Tests"),
    ]),
    ("Exam Management", [
        ("guidance_exams", "Exam Management"),
        ("guidance_exam_results", "Exam Results"),
        ("guidance_archived_results", "Archived Results"),
    ]),
    ("AI & Intelligence", [
        ("guidance_rules", "Recommendation Rules"),
    ]),
    ("Administration", [
        ("guidance_evaluators", "Evaluator Management"),
        ("guidance_profile", "Profile"),
    ]),
]

EVALUATOR_MENU = [
    ("Overview", [("evaluator_dashboard", "Dashboard")]),
    ("Exam Management", [
        ("evaluator_department_exams", "Department Exams"),
        ("evaluator_question_bank", "Question Bank"),
        ("evaluator_question_builder", "Question Builder"),
        ("evaluator_archived_questions", "Archived Questions"),
    ]),
    ("Results & Analysis", [
        ("evaluator_exam_results", "Department Exam Results"),
        ("evaluator_student_results", "Academic Exam Results"),
    ]),
    ("Account", [("evaluator_profile", "Profile")]),
]
