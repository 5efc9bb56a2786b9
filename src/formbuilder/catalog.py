from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from formbuilder.models import FormField


@dataclass(frozen=True)
class FormTemplate:
    id: str
    name: str
    description: str
    category: str
    icon: str
    color: str
    fields: tuple[FormField, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "icon": self.icon,
            "color": self.color,
            "fields": [item.to_dict() for item in self.fields],
        }


def _fields(*rows: tuple[Any, ...]) -> tuple[FormField, ...]:
    result: list[FormField] = []
    for order, row in enumerate(rows):
        field_id, field_type, label, placeholder, required, *rest = row
        result.append(
            FormField(
                id=field_id,
                type=field_type,
                label=label,
                placeholder=placeholder,
                required=required,
                options=list(rest[0]) if rest else None,
                order=order,
            )
        )
    return tuple(result)


TEMPLATES: tuple[FormTemplate, ...] = (
    FormTemplate(
        id="contact-form",
        name="Contact Form",
        description="A simple contact form for collecting inquiries",
        category="Business",
        icon="📧",
        color="#3B82F6",
        fields=_fields(
            ("name", "text", "Full Name", "Enter your full name", True),
            ("email", "email", "Email Address", "Enter your email address", True),
            ("phone", "text", "Phone Number", "Enter your phone number", False),
            (
                "subject", "select", "Subject", "Select a subject", True,
                ["General Inquiry", "Support", "Sales", "Partnership", "Other"],
            ),
            ("message", "textarea", "Message", "Tell us how we can help you...", True),
        ),
    ),
    FormTemplate(
        id="job-application",
        name="Job Application",
        description="Professional job application form",
        category="Business",
        icon="💼",
        color="#10B981",
        fields=_fields(
            ("full-name", "text", "Full Name", "Enter your full name", True),
            ("email", "email", "Email Address", "Enter your email address", True),
            ("phone", "text", "Phone Number", "Enter your phone number", True),
            ("position", "text", "Position Applied For", "Enter the position you're applying for", True),
            (
                "experience", "select", "Years of Experience", "Select your experience level", True,
                ["0-1 years", "1-3 years", "3-5 years", "5-10 years", "10+ years"],
            ),
            (
                "skills", "checkbox", "Skills", "Select your skills", True,
                ["JavaScript", "React", "Node.js", "Python", "SQL", "AWS", "Docker", "Git"],
            ),
            ("cover-letter", "textarea", "Cover Letter", "Tell us why you're the perfect candidate...", True),
            ("available", "date", "Available Start Date", "Select your available start date", True),
        ),
    ),
    FormTemplate(
        id="customer-survey",
        name="Customer Survey",
        description="Gather customer feedback and satisfaction data",
        category="Research",
        icon="📊",
        color="#8B5CF6",
        fields=_fields(
            (
                "satisfaction", "radio", "How satisfied are you with our service?",
                "Select your satisfaction level", True,
                ["Very Dissatisfied", "Dissatisfied", "Neutral", "Satisfied", "Very Satisfied"],
            ),
            (
                "recommend", "radio", "Would you recommend us to others?", "Select your answer", True,
                ["Definitely", "Probably", "Not Sure", "Probably Not", "Definitely Not"],
            ),
            (
                "features", "checkbox", "Which features do you use most?", "Select all that apply", False,
                ["Feature A", "Feature B", "Feature C", "Feature D", "Feature E"],
            ),
            ("improvements", "textarea", "What could we improve?", "Share your suggestions for improvement...", False),
            (
                "age-group", "select", "Age Group", "Select your age group", False,
                ["18-24", "25-34", "35-44", "45-54", "55-64", "65+"],
            ),
        ),
    ),
    FormTemplate(
        id="event-registration",
        name="Event Registration",
        description="Register attendees for events and conferences",
        category="Events",
        icon="🎫",
        color="#F59E0B",
        fields=_fields(
            ("full-name", "text", "Full Name", "Enter your full name", True),
            ("email", "email", "Email Address", "Enter your email address", True),
            ("company", "text", "Company/Organization", "Enter your company name", False),
            (
                "ticket-type", "radio", "Ticket Type", "Select your ticket type", True,
                ["General Admission", "VIP", "Student", "Early Bird"],
            ),
            (
                "dietary", "select", "Dietary Requirements", "Select your dietary requirements", False,
                ["None", "Vegetarian", "Vegan", "Gluten-Free", "Dairy-Free", "Other"],
            ),
            ("special-needs", "textarea", "Special Requirements", "Any special requirements or accommodations needed?", False),
        ),
    ),
    FormTemplate(
        id="feedback-form",
        name="Feedback Form",
        description="Collect general feedback and suggestions",
        category="Business",
        icon="💭",
        color="#EF4444",
        fields=_fields(
            ("name", "text", "Name (Optional)", "Enter your name", False),
            ("email", "email", "Email (Optional)", "Enter your email for follow-up", False),
            (
                "feedback-type", "select", "Type of Feedback", "Select the type of feedback", True,
                ["Bug Report", "Feature Request", "General Feedback", "Complaint", "Compliment"],
            ),
            (
                "rating", "radio", "Overall Rating", "Rate your experience", True,
                ["1 - Poor", "2 - Fair", "3 - Good", "4 - Very Good", "5 - Excellent"],
            ),
            ("feedback", "textarea", "Your Feedback", "Please share your detailed feedback...", True),
        ),
    ),
)


def list_templates() -> list[FormTemplate]:
    return list(TEMPLATES)


def get_template(template_id: str) -> FormTemplate | None:
    for template in TEMPLATES:
        if template.id == template_id:
            return template
    return None


def templates_by_category(category: str) -> list[FormTemplate]:
    return [template for template in TEMPLATES if template.category == category]


def categories() -> list[str]:
    seen: list[str] = []
    for template in TEMPLATES:
        if template.category not in seen:
            seen.append(template.category)
    return seen
