"""
Shared fixtures for Idea Studio tests
"""
import json

import pytest

from support import make_settings


@pytest.fixture
def settings(tmp_path):
    return make_settings(tmp_path)


@pytest.fixture
def profile_payload():
    return {
        "location": "Seoul",
        "ageGroup": "30s",
        "mbti": "ENFP",
        "occupation": "Developer",
        "budget": 10000000,
        "time": "Evening",
        "interests": ["IT/Tech", "Education"],
    }


@pytest.fixture
def provider_payload():
    """Provider output in the nested shape the prompt asks for"""
    return {
        "title": "Code Mentor Live",
        "description": "Evening live-coding bootcamps for career changers.",
        "marketData": {
            "size": "$4.2B",
            "growthRate": "+18%",
            "competition": "Medium"
        },
        "whyYou": {
            "mbtiStrengths": ["Enthusiastic teaching", "Community building", ""],
            "locationAdvantage": "Dense tech job market in Seoul",
            "experienceMatch": "Years of hands-on development"
        },
        "roadmap": [
            {"week": "1-2", "title": "Validate", "tasks": ["Interview 20 learners", "Draft curriculum"], "cost": "$0"},
            {"week": "3-4", "title": "Pilot", "tasks": ["Run first cohort"], "cost": "$500"}
        ],
        "products": [
            {"name": "USB Microphone", "category": "Audio", "price": "$79", "amazonKeyword": "usb condenser microphone"},
            {"name": "Ring Light", "category": "Video", "price": "$35"}
        ]
    }


@pytest.fixture
def provider_text(provider_payload):
    return json.dumps(provider_payload)
