from dataclasses import dataclass, field, fields
from typing import List, Dict, Optional, Any
import datetime as _dt


def _now_iso():
    return _dt.datetime.now(_dt.timezone.utc).replace(microsecond=0).isoformat().replace('+00:00', 'Z')


def _pick(cls, d: Dict[str, Any], aliases: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
    """Keep only keys the dataclass knows about; server props carry extras."""
    allowed = {f.name for f in fields(cls)}
    out = {}
    for k, v in d.items():
        k = (aliases or {}).get(k, k)
        if k in allowed and k not in out:
            out[k] = v
    return out


@dataclass
class Course:
    id: int
    course_code: str
    course_name: str
    description: str = ''
    passing_rate: int = 80


def course_from_dict(d: Dict[str, Any]) -> Course:
    filtered = _pick(Course, d)
    filtered.setdefault('id', 0)
    filtered.setdefault('course_code', '')
    filtered.setdefault('course_name', '')
    if filtered.get('description') is None:
        filtered['description'] = ''
    filtered['passing_rate'] = int(filtered.get('passing_rate') or 80)
    return Course(**filtered)


@dataclass
class EvaluatorAccount:
    id: int
    username: str
    email: str
    name: str
    department: str
    created_at: Optional[str] = None


def evaluator_from_dict(d: Dict[str, Any]) -> EvaluatorAccount:
    # evaluator rows come joined with their user record
    user = d.get('user') or {}
    return EvaluatorAccount(
        id=d.get('id') or d.get('evaluatorId') or 0,
        username=d.get('username') or user.get('username', ''),
        email=d.get('email') or user.get('email', ''),
        name=d.get('name', ''),
        department=d.get('department') or d.get('Department', ''),
        created_at=d.get('created_at'),
    )


@dataclass
class Exam:
    exam_id: int
    exam_ref_no: str
    time_limit: int
    exam_type: str = 'manual'  # manual | random
    status: str = 'active'  # active | inactive
    question_count: int = 0
    personality_count: int = 0
    include_personality_test: bool = False
    result_count: int = 0
    created_at: Optional[str] = None


def exam_from_dict(d: Dict[str, Any]) -> Exam:
    return Exam(
        exam_id=d.get('examId') or d.get('exam_id') or d.get('id') or 0,
        exam_ref_no=d.get('exam-ref-no') or d.get('exam_ref_no') or '',
        time_limit=int(d.get('time_limit') or 0),
        exam_type=d.get('exam_type') or 'manual',
        status=d.get('status') or 'inactive',
        question_count=len(d.get('questions') or []),
        personality_count=len(d.get('personalityQuestions') or []),
        include_personality_test=bool(d.get('include_personality_test')),
        result_count=len(d.get('results') or []),
        created_at=d.get('created_at'),
    )


@dataclass
class DepartmentExam:
    id: int
    title: str
    exam_ref_no: str
    time_limit: int
    exam_type: str = 'manual'
    status: int = 1  # 1 active, 0 inactive
    question_count: int = 0
    created_at: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.status == 1


def department_exam_from_dict(d: Dict[str, Any]) -> DepartmentExam:
    count = d.get('questions_count')
    if count is None:
        count = len(d.get('questions') or [])
    return DepartmentExam(
        id=d.get('id') or d.get('examId') or 0,
        title=d.get('title') or d.get('exam_title') or '',
        exam_ref_no=d.get('exam_ref_no') or d.get('exam-ref-no') or '',
        time_limit=int(d.get('time_limit') or 0),
        exam_type=d.get('exam_type') or 'manual',
        status=1 if str(d.get('status')) in {'1', 'True', 'true', 'active'} else 0,
        question_count=int(count),
        created_at=d.get('created_at'),
    )


OPTION_FIELDS = ['option1', 'option2', 'option3', 'option4', 'option5']
IMAGE_FIELDS = ['image'] + [f"{o}_image" for o in OPTION_FIELDS]


@dataclass
class Question:
    question_id: int
    question: str
    category: str
    correct_answer: str = 'A'
    option1: str = ''
    option2: str = ''
    option3: str = ''
    option4: str = ''
    option5: str = ''
    direction: str = ''
    image: Optional[str] = None
    option1_image: Optional[str] = None
    option2_image: Optional[str] = None
    option3_image: Optional[str] = None
    option4_image: Optional[str] = None
    option5_image: Optional[str] = None
    formatted_question: Optional[str] = None
    archived: bool = False

    def options(self) -> List[str]:
        return [getattr(self, o) for o in OPTION_FIELDS]


def question_from_dict(d: Dict[str, Any]) -> Question:
    filtered = _pick(Question, d, aliases={'questionId': 'question_id'})
    filtered.setdefault('question_id', d.get('id') or 0)
    filtered.setdefault('question', '')
    filtered.setdefault('category', '')
    for key in OPTION_FIELDS + ['direction']:
        if filtered.get(key) is None:
            filtered[key] = ''
    # status: 1 active, 0 archived
    if 'status' in d and 'archived' not in d:
        filtered['archived'] = str(d['status']) in {'0', 'archived'}
    return Question(**filtered)


@dataclass
class DraftQuestion:
    """A question held locally until the whole batch is submitted."""
    question: str = ''
    option1: str = ''
    option2: str = ''
    option3: str = ''
    option4: str = ''
    option5: str = ''
    correct_answer: str = 'A'
    category: str = ''
    direction: str = ''
    image: Optional[str] = None  # data URL
    option1_image: Optional[str] = None
    option2_image: Optional[str] = None
    option3_image: Optional[str] = None
    option4_image: Optional[str] = None
    option5_image: Optional[str] = None
    id: Optional[str] = None


@dataclass
class PersonalityQuestion:
    id: int
    question: str
    dichotomy: str  # E/I, S/N, T/F, J/P
    positive_side: str
    negative_side: str


def personality_question_from_dict(d: Dict[str, Any]) -> PersonalityQuestion:
    dichotomy = d.get('dichotomy') or 'E/I'
    sides = dichotomy.split('/') if '/' in dichotomy else [dichotomy, '']
    return PersonalityQuestion(
        id=d.get('id') or 0,
        question=d.get('question') or '',
        dichotomy=dichotomy,
        positive_side=d.get('positive_side') or sides[0],
        negative_side=d.get('negative_side') or sides[1],
    )


@dataclass
class RecommendationRule:
    id: int
    personality_type: str
    min_score: float
    max_score: float
    course_code: str = ''
    course_name: str = ''
    created_at: Optional[str] = None


def rule_from_dict(d: Dict[str, Any]) -> RecommendationRule:
    ptype = d.get('personality_type')
    if isinstance(ptype, dict):
        ptype = ptype.get('type', '')
    course = d.get('recommended_course') or {}
    return RecommendationRule(
        id=d.get('id') or 0,
        personality_type=str(ptype or ''),
        min_score=float(d.get('min_score') or 0),
        max_score=float(d.get('max_score') or 0),
        course_code=str(course.get('course_code') or ''),
        course_name=str(course.get('course_name') or ''),
        created_at=d.get('created_at'),
    )


@dataclass
class StudentRecommendation:
    id: int
    student_name: str
    recommended_course: str
    personality_type: str = ''
    score: float = 0
    created_at: Optional[str] = None


def recommendation_from_dict(d: Dict[str, Any]) -> StudentRecommendation:
    examinee = d.get('examinee') or d.get('student') or {}
    course = d.get('recommended_course') or d.get('course') or ''
    if isinstance(course, dict):
        course = course.get('course_name') or course.get('course_code') or ''
    ptype = d.get('personality_type') or ''
    if isinstance(ptype, dict):
        ptype = ptype.get('type', '')
    result = d.get('result') or d.get('exam_result') or {}
    return StudentRecommendation(
        id=d.get('id') or 0,
        student_name=d.get('student_name') or examinee.get('name') or '',
        recommended_course=str(course),
        personality_type=str(ptype),
        score=float(d.get('score') or result.get('score') or 0),
        created_at=d.get('created_at'),
    )


@dataclass
class ExamResult:
    result_id: int
    student_name: str
    exam_ref_no: str
    score: float
    correct_answers: Optional[int] = None
    total_questions: Optional[int] = None
    exam_title: str = ''
    archived: bool = False
    created_at: str = field(default_factory=_now_iso)

    @property
    def year(self) -> Optional[int]:
        try:
            return int(str(self.created_at)[:4])
        except ValueError:
            return None


def result_from_dict(d: Dict[str, Any]) -> ExamResult:
    examinee = d.get('examinee') or d.get('student') or {}
    exam = d.get('exam') or {}
    return ExamResult(
        result_id=d.get('resultId') or d.get('result_id') or d.get('id') or 0,
        student_name=d.get('student_name') or examinee.get('name') or '',
        exam_ref_no=exam.get('exam-ref-no') or d.get('exam_ref_no') or '',
        score=float(d.get('score') if d.get('score') is not None else d.get('percentage') or 0),
        correct_answers=d.get('correct_answers', d.get('correct')),
        total_questions=d.get('total_questions', d.get('total_items')),
        exam_title=exam.get('title') or d.get('exam_title') or '',
        archived=bool(d.get('is_archived') or d.get('archived')),
        created_at=d.get('created_at') or _now_iso(),
    )


@dataclass
class PageLink:
    label: str
    url: Optional[str]
    active: bool = False
    page: Optional[int] = None


@dataclass
class Paginated:
    items: List[Any]
    links: List[PageLink] = field(default_factory=list)
    total: int = 0
    current_page: int = 1
    last_page: int = 1
    per_page: int = 20
