# homework_helper/models/homework.py
import enum

from sqlalchemy import Boolean, Column, DateTime, Enum, ForeignKey, Integer, JSON, String, Text, func

from homework_helper.db.base import Base


class RequestStatus(str, enum.Enum):
    OPEN = "open"
    ANSWERED = "answered"
    CLOSED = "closed"


class ResponseSource(str, enum.Enum):
    AI = "ai"
    USER = "user"
    TEACHER = "teacher"
    OTHER = "other"


class JobType(str, enum.Enum):
    EXPLANATION = "explanation"
    STEP_BY_STEP = "step_by_step"
    HINT_ONLY = "hint_only"
    FULL_SOLUTION = "full_solution"
    OTHER = "other"


class JobStatus(str, enum.Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


def _text_enum(enum_cls: type[enum.Enum], name: str) -> Enum:
    # Храним значения ("open"), а не имена членов ("OPEN"), как обычный текст
    return Enum(
        enum_cls,
        name=name,
        native_enum=False,
        length=32,
        values_callable=lambda members: [member.value for member in members],
    )


class HomeworkRequest(Base):
    """Вопрос, который задал ученик."""
    __tablename__ = "homework_requests"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # Пользователь приходит от внешнего провайдера сессий, поэтому без FK
    user_id = Column(String, nullable=False, index=True)

    # Классификация
    subject = Column(String, nullable=True)
    grade_level = Column(String, nullable=True)
    topic = Column(String, nullable=True)

    title = Column(String, nullable=True)
    question_text = Column(Text, nullable=False)

    # Метаданные вложений (картинки, PDF, ссылки) как есть
    attachments = Column(JSON, nullable=True)

    status = Column(
        _text_enum(RequestStatus, "homework_request_status"),
        nullable=False,
        default=RequestStatus.OPEN,
        server_default=RequestStatus.OPEN.value,
    )

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class HomeworkResponse(Base):
    """
    Ответ / объяснение к вопросу.
    На один вопрос может быть несколько ответов (варианты ИИ, ответы людей).
    """
    __tablename__ = "homework_responses"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    request_id = Column(Integer, ForeignKey("homework_requests.id"), nullable=False, index=True)

    # Кто добавил ответ
    user_id = Column(String, nullable=True)
    source = Column(
        _text_enum(ResponseSource, "homework_response_source"),
        nullable=False,
        default=ResponseSource.AI,
        server_default=ResponseSource.AI.value,
    )

    answer_text = Column(Text, nullable=False)

    # Структурированные шаги решения для UI
    steps = Column(JSON, nullable=True)

    is_accepted = Column(Boolean, nullable=False, default=False, server_default="false")

    # Оценка 1-5 и отзыв ученика
    rating = Column(Integer, nullable=True)
    feedback = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class HomeworkJob(Base):
    """Запись о попытке генерации ответа ИИ. Сама генерация выполняется снаружи."""
    __tablename__ = "homework_jobs"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    request_id = Column(Integer, ForeignKey("homework_requests.id"), nullable=True, index=True)
    user_id = Column(String, nullable=True, index=True)

    job_type = Column(
        _text_enum(JobType, "homework_job_type"),
        nullable=False,
        default=JobType.FULL_SOLUTION,
        server_default=JobType.FULL_SOLUTION.value,
    )

    input = Column(JSON, nullable=True)
    output = Column(JSON, nullable=True)

    status = Column(
        _text_enum(JobStatus, "homework_job_status"),
        nullable=False,
        default=JobStatus.COMPLETED,
        server_default=JobStatus.COMPLETED.value,
    )

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
