from datetime import datetime, timezone

from app.core.models import Answer, Meeting, Question
from app.rendering.briefing_renderer import render_briefing_html
from app.rendering.composer import (
    LOCATION_FALLBACK,
    NO_ANSWERS_TEXT,
    compose_briefing_model,
    display_answer,
    format_start_time,
    pair_answers,
)
from app.rendering.plaintext import render_plaintext


def _question(order, qtype="text", scale=None):
    return Question(
        id=f"question_m1_{order}",
        meeting_id="m1",
        question=f"Question {order}?",
        type=qtype,
        order=order,
        scale=scale,
        user_id="u1",
    )


def _answer(order, text="", rating=None):
    return Answer(id=f"a{order}", question_id=f"question_m1_{order}", meeting_id="m1", answer=text, rating=rating, user_id="u1")


def _meeting(**fields):
    values = {
        "id": "m1",
        "title": "Ops <Review>",
        "start_time": datetime(2025, 9, 8, 13, 30, tzinfo=timezone.utc),
        "end_time": datetime(2025, 9, 8, 14, 30, tzinfo=timezone.utc),
        "user_id": "u1",
    }
    values.update(fields)
    return Meeting(**values)


class TestComposer:
    """Test the briefing context."""

    def test_format_start_time_in_configured_zone(self):
        """Test start times in the configured zone with its abbreviation."""
        start = datetime(2025, 9, 8, 13, 30, tzinfo=timezone.utc)
        assert format_start_time(start, "America/New_York") == "Mon, Sep 8, 2025 at 9:30 AM EDT"
        assert format_start_time(start, "UTC") == "Mon, Sep 8, 2025 at 1:30 PM UTC"

    def test_display_answer_prefers_text_then_rating(self):
        """Test that text wins and rating-only answers show rating/scale."""
        assert display_answer(_answer(1, "Ship it"), _question(1)) == "Ship it"
        assert display_answer(_answer(2, rating=3), _question(2, "rating", scale=10)) == "3/10"
        assert display_answer(_answer(2, rating=4), _question(2, "rating")) == "4/5"

    def test_pair_answers_orders_by_question_and_drops_orphans(self):
        """Test question ordering and dropping answers without a question."""
        questions = [_question(1), _question(2), _question(3)]
        answers = [_answer(3, "third"), _answer(1, "first"), _answer(9, "orphan")]

        pairs = pair_answers(questions, answers)

        assert [p["answer"] for p in pairs] == ["first", "third"]
        assert [p["order"] for p in pairs] == [1, 3]

    def test_location_fallback_and_year(self):
        """Test the blank-location fallback and footer year."""
        model = compose_briefing_model(_meeting(location="  "), [], [], tz_name="UTC", now=datetime(2031, 2, 1, tzinfo=timezone.utc))
        assert model["location"] == LOCATION_FALLBACK
        assert model["items"] == []
        assert model["current_year"] == "2031"


class TestRenderers:
    """Test the HTML and plaintext bodies."""

    def test_plaintext_shows_placeholder_without_answers(self):
        """Test the placeholder in plaintext when nothing was answered."""
        text = render_plaintext(compose_briefing_model(_meeting(), [], [], tz_name="UTC"))
        assert NO_ANSWERS_TEXT in text
        assert "Time: Mon, Sep 8, 2025 at 1:30 PM UTC" in text

    def test_plaintext_numbers_answers(self):
        """Test numbered questions with indented answers."""
        model = compose_briefing_model(_meeting(), [_question(1)], [_answer(1, "Hire two engineers")], tz_name="UTC")
        text = render_plaintext(model)
        assert "1. Question 1?" in text
        assert "   Hire two engineers" in text
        assert NO_ANSWERS_TEXT not in text

    def test_html_escapes_user_content(self):
        """Test that titles and answers are HTML-escaped."""
        model = compose_briefing_model(_meeting(), [_question(1)], [_answer(1, "<script>alert(1)</script>")], tz_name="UTC")
        html = render_briefing_html(model)
        assert "<script>" not in html
        assert "&lt;script&gt;" in html
        assert "Ops &lt;Review&gt;" in html
