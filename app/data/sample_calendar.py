# Offsets are relative to the time the events are fetched.
SAMPLE_EVENTS = [
    {
        "id": "event_1",
        "title": "Weekly Team Standup",
        "days_ahead": 1,
        "duration_minutes": 60,
        "description": "Weekly team sync and progress updates",
        "attendees": ["john@company.com", "sarah@company.com", "mike@company.com"],
        "location": "Conference Room A",
    },
    {
        "id": "event_2",
        "title": "Strategic Planning Session",
        "days_ahead": 2,
        "duration_minutes": 120,
        "description": "Q2 strategic planning and goal setting",
        "attendees": ["ceo@company.com", "cto@company.com", "head-of-product@company.com"],
        "location": "Executive Boardroom",
    },
    {
        "id": "event_3",
        "title": "Client Presentation",
        "days_ahead": 3,
        "duration_minutes": 90,
        "description": "Quarterly business review with key client",
        "attendees": ["client@external.com", "sales@company.com"],
        "location": "Virtual - Zoom",
    },
    {
        "id": "event_4",
        "title": "Performance Review Meeting",
        "days_ahead": 5,
        "duration_minutes": 60,
        "description": "Monthly performance review with direct reports",
        "attendees": ["employee1@company.com", "employee2@company.com"],
        "location": "Manager Office",
    },
]
