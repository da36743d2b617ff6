"""Module: community."""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy import delete, desc, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from petcare.api.v1.routes.deps import get_current_user_id, get_db, parse_id
from petcare.core.errors import ForbiddenError, NotFoundError, ValidationError
from petcare.db.models.community_answer import CommunityAnswer
from petcare.db.models.community_post import POST_TAGS, CommunityPost, decode_tags, encode_tags
from petcare.db.models.community_question import CommunityQuestion
from petcare.db.models.post_comment import PostComment
from petcare.db.models.post_like import PostLike
from petcare.db.models.user import User
from petcare.schemas.community import (
    AcceptRequest,
    AnswerCreate,
    AnswerOut,
    CommentRequest,
    LikeRequest,
    MediaItem,
    PostCreate,
    PostOut,
    PostPage,
    QuestionCreate,
    QuestionOut,
)

logger = logging.getLogger(__name__)

router = APIRouter()

PAGE_SIZE = 10
MAX_PAGE_SIZE = 50


# -------------------------
# Helpers
# -------------------------
def _author_names(db: Session, author_ids: set[int]) -> dict[int, str]:
    if not author_ids:
        return {}
    rows = db.execute(select(User.id, User.name).where(User.id.in_(author_ids))).all()
    return {r.id: r.name for r in rows}


def _as_post_out(post: CommunityPost, author_name: str, liked_by_me: bool) -> PostOut:
    return PostOut(
        id=str(post.id),
        author_id=str(post.author_id),
        author_name=author_name,
        created_at=post.created_at,
        content=post.content,
        media=[MediaItem(**m) for m in post.media] if post.media else None,
        tags=decode_tags(post.tags),
        likes=post.likes,
        comments=post.comments,
        liked_by_me=liked_by_me,
    )


def _post_out(db: Session, post: CommunityPost, user_id: int) -> PostOut:
    liked = db.execute(
        select(PostLike.id).where(PostLike.post_id == post.id, PostLike.user_id == user_id)
    ).first() is not None
    names = _author_names(db, {post.author_id})
    return _as_post_out(post, names.get(post.author_id, ""), liked)


def _get_post(db: Session, post_id: str) -> CommunityPost:
    pid = parse_id(post_id, "post id")
    post = db.execute(select(CommunityPost).where(CommunityPost.id == pid)).scalar_one_or_none()
    if not post:
        raise NotFoundError("Post not found")
    return post


def _get_question(db: Session, question_id: str) -> CommunityQuestion:
    qid = parse_id(question_id, "question id")
    question = db.execute(
        select(CommunityQuestion).where(CommunityQuestion.id == qid)
    ).scalar_one_or_none()
    if not question:
        raise NotFoundError("Question not found")
    return question


def _questions_out(db: Session, questions: list[CommunityQuestion]) -> list[QuestionOut]:
    if not questions:
        return []

    answers = db.execute(
        select(CommunityAnswer)
        .where(CommunityAnswer.question_id.in_([q.id for q in questions]))
        .order_by(CommunityAnswer.created_at, CommunityAnswer.id)
    ).scalars().all()

    author_ids = {q.author_id for q in questions} | {a.author_id for a in answers}
    names = _author_names(db, author_ids)

    by_question: dict[int, list[AnswerOut]] = {q.id: [] for q in questions}
    for a in answers:
        by_question[a.question_id].append(
            AnswerOut(
                id=str(a.id),
                author_id=str(a.author_id),
                author_name=names.get(a.author_id, ""),
                text=a.text,
                created_at=a.created_at,
                is_accepted=a.is_accepted,
            )
        )

    return [
        QuestionOut(
            id=str(q.id),
            question=q.question,
            author_id=str(q.author_id),
            author_name=names.get(q.author_id, ""),
            created_at=q.created_at,
            tags=decode_tags(q.tags),
            answers=by_question[q.id],
        )
        for q in questions
    ]


# -------------------------
# Posts
# -------------------------

@router.get("/posts", response_model=PostPage, summary="Paginated community feed")
def list_posts(
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, alias="pageSize"),
    tag: str = Query(default="all"),
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    if tag != "all" and tag not in POST_TAGS:
        raise ValidationError("Unknown tag")

    stmt = select(CommunityPost).order_by(desc(CommunityPost.created_at), desc(CommunityPost.id))
    if tag != "all":
        stmt = stmt.where(CommunityPost.tags.like(f"%,{tag},%"))

    # One extra row tells us whether another page exists.
    offset = (page - 1) * page_size
    rows = db.execute(stmt.offset(offset).limit(page_size + 1)).scalars().all()
    posts = rows[:page_size]

    liked_ids: set[int] = set()
    if posts:
        liked_ids = set(
            db.execute(
                select(PostLike.post_id).where(
                    PostLike.user_id == user_id,
                    PostLike.post_id.in_([p.id for p in posts]),
                )
            ).scalars().all()
        )
    names = _author_names(db, {p.author_id for p in posts})

    return PostPage(
        items=[_as_post_out(p, names.get(p.author_id, ""), p.id in liked_ids) for p in posts],
        page=page,
        has_more=len(rows) > page_size,
    )


@router.post("/posts", response_model=PostOut, status_code=201, summary="Publish a post")
def create_post(
    payload: PostCreate,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    content = payload.content.strip()
    if not content:
        raise ValidationError("Post content cannot be empty")

    tags = list(dict.fromkeys(payload.tags)) or ["daily"]
    post = CommunityPost(
        author_id=user_id,
        content=content,
        tags=encode_tags(tags),
        media=[m.model_dump(exclude_none=True) for m in payload.media] if payload.media else None,
        likes=0,
        comments=0,
    )
    db.add(post)
    db.commit()
    db.refresh(post)

    logger.info("Post id=%s published by user id=%s", post.id, user_id)
    return _post_out(db, post, user_id)


@router.post("/posts/{post_id}/like", response_model=PostOut, summary="Like or unlike a post")
def like_post(
    post_id: str,
    payload: LikeRequest,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    post = _get_post(db, post_id)
    existing = db.execute(
        select(PostLike).where(PostLike.post_id == post.id, PostLike.user_id == user_id)
    ).scalar_one_or_none()

    # Toggling to the current state is a no-op.
    if payload.liked and existing is None:
        db.add(PostLike(post_id=post.id, user_id=user_id))
        try:
            db.flush()
        except IntegrityError:
            # A concurrent request from the same user already liked it.
            db.rollback()
        else:
            db.execute(
                update(CommunityPost)
                .where(CommunityPost.id == post.id)
                .values(likes=CommunityPost.likes + 1)
            )
    elif not payload.liked and existing is not None:
        removed = db.execute(delete(PostLike).where(PostLike.id == existing.id)).rowcount
        if removed:
            db.execute(
                update(CommunityPost)
                .where(CommunityPost.id == post.id, CommunityPost.likes > 0)
                .values(likes=CommunityPost.likes - 1)
            )

    db.commit()
    db.refresh(post)
    return _post_out(db, post, user_id)


@router.post("/posts/{post_id}/comment", response_model=PostOut, summary="Comment on a post")
def comment_on_post(
    post_id: str,
    payload: CommentRequest,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    post = _get_post(db, post_id)
    text = payload.text.strip()
    if not text:
        raise ValidationError("Comment cannot be empty")

    db.add(PostComment(post_id=post.id, author_id=user_id, text=text))
    db.execute(
        update(CommunityPost)
        .where(CommunityPost.id == post.id)
        .values(comments=CommunityPost.comments + 1)
    )
    db.commit()
    db.refresh(post)
    return _post_out(db, post, user_id)


# -------------------------
# Questions
# -------------------------

@router.get(
    "/questions",
    response_model=list[QuestionOut],
    dependencies=[Depends(get_current_user_id)],
    summary="List questions, newest first",
)
def list_questions(
    limit: int = Query(default=50, ge=1, le=200),
    db: Session = Depends(get_db),
):
    questions = db.execute(
        select(CommunityQuestion)
        .order_by(desc(CommunityQuestion.created_at), desc(CommunityQuestion.id))
        .limit(limit)
    ).scalars().all()
    return _questions_out(db, list(questions))


@router.post("/questions", response_model=QuestionOut, status_code=201, summary="Ask a question")
def create_question(
    payload: QuestionCreate,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    text = payload.question.strip()
    if not text:
        raise ValidationError("Question cannot be empty")

    question = CommunityQuestion(
        author_id=user_id,
        question=text,
        tags=encode_tags(list(dict.fromkeys(payload.tags)) or ["qa"]),
    )
    db.add(question)
    db.commit()
    db.refresh(question)
    return _questions_out(db, [question])[0]


@router.post("/questions/{question_id}/answers", response_model=QuestionOut, status_code=201, summary="Answer a question")
def create_answer(
    question_id: str,
    payload: AnswerCreate,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    question = _get_question(db, question_id)
    text = payload.text.strip()
    if not text:
        raise ValidationError("Answer cannot be empty")

    db.add(CommunityAnswer(question_id=question.id, author_id=user_id, text=text, is_accepted=False))
    db.commit()
    return _questions_out(db, [question])[0]


@router.post("/questions/{question_id}/accept", response_model=QuestionOut, summary="Mark the accepted answer")
def accept_answer(
    question_id: str,
    payload: AcceptRequest,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    question = _get_question(db, question_id)
    if question.author_id != user_id:
        raise ForbiddenError("Only the question author can accept an answer")

    aid = parse_id(payload.answer_id, "answer id")
    answers = db.execute(
        select(CommunityAnswer).where(CommunityAnswer.question_id == question.id)
    ).scalars().all()
    if aid not in {a.id for a in answers}:
        raise NotFoundError("Answer not found")

    for a in answers:
        a.is_accepted = a.id == aid

    db.commit()
    return _questions_out(db, [question])[0]
