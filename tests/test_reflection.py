import pytest

from app.core.errors import ConflictError, QuestionNotFoundError, ValidationFailedError
from app.core.models import Template
from app.services import reflection
from app.services.templates import get_template


def _rating_template(backend, template_id="t_rating"):
    return backend.db.templates.create(
        Template(
            id=template_id,
            name="Quick pulse",
            questions=[{"id": "q1", "type": "rating", "question": "How ready are you?", "required": True, "scale": 5}],
            user_id="system",
            is_default=True,
        )
    )


class TestApplyTemplate:
    """Test materializing template questions onto a meeting."""

    def test_materializes_one_question_per_spec_in_order(self, backend, make_meeting):
        """Test one question per spec, 1-based order, fields copied."""
        meeting = make_meeting()
        template = get_template(backend.db, "template_team_meeting")

        questions = reflection.apply_template(backend.db, meeting, template)

        assert len(questions) == len(template.questions)
        for position, (question, spec) in enumerate(zip(questions, template.questions), start=1):
            assert question.order == position
            assert question.question == spec.question
            assert question.type == spec.type
            assert question.is_required == spec.required
            assert question.meeting_id == meeting.id
            assert question.user_id == meeting.user_id
        assert questions[1].scale == 5
        assert questions[3].options == ["Facilitator", "Decision maker", "Listener", "Coach"]
        assert questions[0].options is None
        assert backend.db.meetings.get(meeting.id).template_id == template.id

    def test_later_template_edits_do_not_change_materialized_questions(self, backend, make_meeting):
        """Test that editing a template leaves applied questions untouched."""
        meeting = make_meeting()
        template = _rating_template(backend)
        reflection.apply_template(backend.db, meeting, template)

        backend.db.templates.update(
            template.id,
            questions=[{"id": "q1", "type": "text", "question": "Rewritten", "required": False}],
        )

        questions = reflection.list_questions(backend.db, meeting.id)
        assert [(q.question, q.type, q.scale) for q in questions] == [("How ready are you?", "rating", 5)]

    def test_reapplying_same_template_fills_gaps_without_duplicates(self, backend, make_meeting):
        """Test that re-running an interrupted apply completes the set."""
        meeting = make_meeting()
        template = get_template(backend.db, "template_strategic_planning")
        reflection.apply_template(backend.db, meeting, template)

        # Simulate an interrupted first run by dropping the last question
        backend.db.questions.delete(reflection.question_id_for(meeting.id, 4))
        meeting = backend.db.meetings.get(meeting.id)
        questions = reflection.apply_template(backend.db, meeting, template)

        assert [q.order for q in questions] == [1, 2, 3, 4]
        assert backend.db.questions.count({"meeting_id": meeting.id}) == 4

    def test_different_template_is_rejected(self, backend, make_meeting):
        """Test that a second, different template is a conflict."""
        meeting = make_meeting()
        reflection.apply_template(backend.db, meeting, get_template(backend.db, "template_team_meeting"))
        meeting = backend.db.meetings.get(meeting.id)

        with pytest.raises(ConflictError):
            reflection.apply_template(backend.db, meeting, get_template(backend.db, "template_performance_review"))

    def test_meeting_has_no_questions_before_template(self, backend, make_meeting):
        """Test that a fresh meeting has no questions."""
        meeting = make_meeting()
        assert reflection.list_questions(backend.db, meeting.id) == []


class TestSaveAnswer:
    """Test answer upserts and the reflection view."""

    def test_rating_example_sets_rating_and_has_reflection(self, backend, make_meeting):
        """Test saving a rating answer flags the meeting as reflected."""
        meeting = make_meeting("m1", "Sync", is_selected=True)
        assert meeting.has_reflection is False
        questions = reflection.apply_template(backend.db, meeting, _rating_template(backend))

        answer = reflection.save_answer(backend.db, meeting, questions[0].id, "", rating=4)

        assert answer.rating == 4
        assert answer.question_id == questions[0].id
        assert backend.db.meetings.get("m1").has_reflection is True

    def test_second_save_updates_same_record(self, backend, make_meeting):
        """Test that saving twice updates one answer record."""
        meeting = make_meeting()
        questions = reflection.apply_template(backend.db, meeting, get_template(backend.db, "template_team_meeting"))
        first = reflection.save_answer(backend.db, meeting, questions[0].id, "Agree on launch date")

        second = reflection.save_answer(backend.db, meeting, questions[0].id, "Agree on launch scope")

        assert second.id == first.id
        assert second.answer == "Agree on launch scope"
        assert backend.db.answers.count({"meeting_id": meeting.id}) == 1
        assert backend.db.meetings.get(meeting.id).has_reflection is True

    def test_answers_are_per_question(self, backend, make_meeting):
        """Test that each question keeps its own answer."""
        meeting = make_meeting()
        questions = reflection.apply_template(backend.db, meeting, get_template(backend.db, "template_team_meeting"))
        reflection.save_answer(backend.db, meeting, questions[0].id, "Outcome")
        reflection.save_answer(backend.db, meeting, questions[2].id, "Hiring freeze")

        assert backend.db.answers.count({"meeting_id": meeting.id}) == 2

    def test_get_question_rejects_other_meetings_questions(self, backend, make_meeting):
        """Test that a question from another meeting looks absent."""
        first = make_meeting("m1")
        second = make_meeting("m2")
        questions = reflection.apply_template(backend.db, first, _rating_template(backend))

        with pytest.raises(QuestionNotFoundError):
            reflection.get_question(backend.db, second, questions[0].id)

    def test_reflection_view_pairs_questions_and_answers(self, backend, make_meeting):
        """Test that the view pairs every question with its answer or None."""
        meeting = make_meeting()
        questions = reflection.apply_template(backend.db, meeting, get_template(backend.db, "template_team_meeting"))
        reflection.save_answer(backend.db, meeting, questions[1].id, "", rating=3)

        view = reflection.reflection_view(backend.db, meeting)

        assert view["template_id"] == "template_team_meeting"
        assert [item["question"]["order"] for item in view["items"]] == [1, 2, 3, 4]
        assert view["items"][0]["answer"] is None
        assert view["items"][1]["answer"]["rating"] == 3

    def test_reflection_view_reads_template_from_store(self, backend, make_meeting):
        """Test that a meeting object loaded before the apply still reports the template."""
        stale = make_meeting()
        reflection.apply_template(backend.db, stale, get_template(backend.db, "template_performance_review"))

        assert stale.template_id is None
        assert reflection.reflection_view(backend.db, stale)["template_id"] == "template_performance_review"


class TestValidateSubmission:
    """Test request-side answer validation."""

    @pytest.fixture
    def questions(self, backend, make_meeting):
        meeting = make_meeting()
        return reflection.apply_template(backend.db, meeting, get_template(backend.db, "template_team_meeting"))

    def test_text_requires_non_blank_answer(self, questions):
        """Test that text answers must be non-blank."""
        with pytest.raises(ValidationFailedError):
            reflection.validate_submission(questions[0], "   ", None)
        reflection.validate_submission(questions[0], "Clear outcome", None)

    def test_rating_requires_value_within_scale(self, questions):
        """Test that ratings must be chosen and within 1..scale."""
        with pytest.raises(ValidationFailedError):
            reflection.validate_submission(questions[1], "", None)
        with pytest.raises(ValidationFailedError):
            reflection.validate_submission(questions[1], "", 6)
        with pytest.raises(ValidationFailedError):
            reflection.validate_submission(questions[1], "", 0)
        reflection.validate_submission(questions[1], "", 5)

    def test_multiple_choice_must_match_an_option(self, questions):
        """Test that multiple-choice answers must be one of the options."""
        with pytest.raises(ValidationFailedError):
            reflection.validate_submission(questions[3], "Referee", None)
        reflection.validate_submission(questions[3], "Coach", None)
