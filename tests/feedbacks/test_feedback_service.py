import pytest

from designflow.core.exceptions import NotFoundError, ValidationError


def _create(container, designer_id="d1", **kw):
    return container.feedback_service.create(
        designer_id=designer_id,
        designer_name="Davi",
        admin_name="Administrador",
        image_urls=kw.pop("image_urls", ["https://img/1.png"]),
        comment=kw.pop("comment", "Ajustar margens"),
    )


def test_new_feedback_is_unread(container, clock):
    feedback = _create(container)

    assert feedback.viewed is False
    assert feedback.viewed_at is None
    assert feedback.created_at == clock.now_ms
    assert feedback.image_urls == ["https://img/1.png"]


def test_list_filters_by_designer_newest_first(container, clock):
    older = _create(container)
    clock.advance(1000)
    newer = _create(container)
    _create(container, designer_id="d2")

    items = container.feedback_service.list_feedbacks(designer_id="d1")

    assert [f.feedback_id for f in items] == [newer.feedback_id, older.feedback_id]
    assert len(container.feedback_service.list_feedbacks()) == 3


def test_mark_viewed_sets_timestamp(container, repos, clock):
    feedback = _create(container)
    clock.advance(5000)

    container.feedback_service.mark_viewed(feedback.feedback_id)

    stored = repos.feedbacks.feedbacks[feedback.feedback_id]
    assert stored.viewed is True
    assert stored.viewed_at == clock.now_ms


def test_image_urls_must_be_strings(container):
    with pytest.raises(ValidationError):
        _create(container, image_urls="https://img/1.png")
    with pytest.raises(ValidationError):
        _create(container, image_urls=[1, 2])


def test_missing_feedback(container):
    with pytest.raises(NotFoundError):
        container.feedback_service.mark_viewed("feedback-x")
    with pytest.raises(NotFoundError):
        container.feedback_service.delete("feedback-x")
