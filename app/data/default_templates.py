DEFAULT_TEMPLATES = [
    {
        "id": "template_team_meeting",
        "name": "Team Meeting Reflection",
        "description": "Check in on team dynamics, blockers and follow-ups before a recurring team sync.",
        "questions": [
            {"id": "q1", "type": "text", "question": "What outcome do you need from this meeting?", "required": True},
            {"id": "q2", "type": "rating", "question": "How aligned is the team on current priorities?", "required": True, "scale": 5},
            {"id": "q3", "type": "text", "question": "Which blockers should be raised?", "required": False},
            {
                "id": "q4",
                "type": "multiple_choice",
                "question": "What role do you want to play in this meeting?",
                "required": False,
                "options": ["Facilitator", "Decision maker", "Listener", "Coach"],
            },
        ],
    },
    {
        "id": "template_strategic_planning",
        "name": "Strategic Planning Review",
        "description": "Frame the decisions and trade-offs for a planning or goal-setting session.",
        "questions": [
            {"id": "q1", "type": "text", "question": "Which strategic decision must this meeting settle?", "required": True},
            {"id": "q2", "type": "text", "question": "What are the biggest risks to the current plan?", "required": True},
            {"id": "q3", "type": "rating", "question": "How confident are you in the proposed direction?", "required": False, "scale": 10},
            {"id": "q4", "type": "text", "question": "Who else needs to be consulted before committing?", "required": False},
        ],
    },
    {
        "id": "template_performance_review",
        "name": "Performance Review Prep",
        "description": "Prepare balanced, specific feedback ahead of a review with a direct report.",
        "questions": [
            {"id": "q1", "type": "text", "question": "What are this person's most notable contributions?", "required": True},
            {"id": "q2", "type": "text", "question": "Which growth area will you focus on?", "required": True},
            {"id": "q3", "type": "rating", "question": "How well were last cycle's goals met?", "required": True, "scale": 5},
            {
                "id": "q4",
                "type": "multiple_choice",
                "question": "What tone should the conversation take?",
                "required": False,
                "options": ["Celebratory", "Developmental", "Corrective"],
            },
        ],
    },
]
