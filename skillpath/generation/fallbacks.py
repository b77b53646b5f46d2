"""
Deterministic fallback content.

Used when generation fails irrecoverably. Output depends only on the
caller's parameters and always satisfies the same shape and count
invariants as a successful generation.
"""

from __future__ import annotations

from skillpath.models import (
    CareerModule,
    CareerPath,
    Flashcard,
    ModuleQuiz,
    ModuleQuizQuestion,
    PathModule,
    TopicQuiz,
    TopicQuizQuestion,
    UserProfile,
)

PLACEHOLDER_OPTIONS = ["Option A", "Option B", "Option C", "Option D"]

DEFAULT_CAREER_MODULE_COUNT = 6
MIN_CAREER_MODULES = 5
MAX_CAREER_MODULES = 8


def difficulty_label(position: int, total: int) -> str:
    """Label for a 1-based position in a sequence of increasing difficulty."""
    if total <= 1:
        return "basic"
    ratio = (position - 1) / (total - 1)
    if ratio < 1 / 3:
        return "basic"
    if ratio < 2 / 3:
        return "intermediate"
    return "advanced"


def fallback_flashcards(topic: str, count: int) -> list[Flashcard]:
    return [
        Flashcard(
            id=position,
            front_html=f"{topic}: {difficulty_label(position, count)} question {position}?",
            back_html=(
                f"Detailed answer explaining {topic} at {difficulty_label(position, count)} "
                f"difficulty (level {position} of {count})."
            ),
        )
        for position in range(1, count + 1)
    ]


def fallback_topic_quiz(topic: str, count: int) -> TopicQuiz:
    """Single-choice placeholders whose correct answer is always option A."""
    questions = [
        TopicQuizQuestion(
            question=f"Question {position} about {topic}: which option is correct?",
            question_type="single",
            answers=list(PLACEHOLDER_OPTIONS),
            correct_answer=PLACEHOLDER_OPTIONS[0],
            explanation=f"Placeholder question while {topic} content is unavailable.",
            point=10,
        )
        for position in range(1, count + 1)
    ]
    return TopicQuiz(nr_of_questions=str(count), questions=questions)


def fallback_module_quiz(module_name: str) -> ModuleQuiz:
    templates = [
        (f"What is the main focus of {module_name}?", 0,
         "This is the correct answer based on the module content."),
        (f"Which of these is NOT related to {module_name}?", 1,
         "This option is unrelated to the topic."),
        (f"What is a key principle in {module_name}?", 2,
         "This principle is fundamental to understanding the topic."),
        (f"How does {module_name} apply to real-world scenarios?", 3,
         "This reflects the practical application of the concept."),
        (f"What advanced technique is associated with {module_name}?", 0,
         "This is an advanced technique in this field."),
    ]
    return ModuleQuiz(
        questions=[
            ModuleQuizQuestion(
                question=question,
                options=list(PLACEHOLDER_OPTIONS),
                correct_index=index,
                explanation=explanation,
            )
            for question, index, explanation in templates
        ]
    )


def fallback_topic_path(goal: str) -> list[str]:
    return [
        f"Module 1: Introduction to {goal}",
        f"Module 2: Core Concepts of {goal}",
        f"Module 3: Intermediate {goal} Techniques",
        f"Module 4: Advanced {goal} Applications",
        f"Module 5: Real-world {goal} Projects",
    ]


def fallback_career_path_modules(goal: str) -> list[PathModule]:
    return [
        PathModule(
            title=f"Introduction to {goal}",
            description=f"Learn the fundamentals of {goal}",
            estimated_time="1-2 hours",
            content=f"This module introduces the basic concepts of {goal}.",
        ),
        PathModule(
            title=f"{goal} Fundamentals",
            description=f"Understand the core principles of {goal}",
            estimated_time="2-3 hours",
            content=f"Build a solid foundation in {goal} by mastering the essential concepts.",
        ),
        PathModule(
            title=f"Practical {goal}",
            description="Apply your knowledge through practical exercises",
            estimated_time="3-4 hours",
            content="Practice makes perfect. In this module, you'll apply your theoretical knowledge.",
        ),
        PathModule(
            title=f"Advanced {goal}",
            description="Dive deeper into advanced concepts",
            estimated_time="3-4 hours",
            content="Take your skills to the next level with advanced techniques and methodologies.",
        ),
        PathModule(
            title=f"{goal} in the Real World",
            description="Learn how to apply your skills in real-world scenarios",
            estimated_time="2-3 hours",
            content="Discover how professionals use these skills in industry settings.",
        ),
    ]


def fallback_learning_path(goal: str, path_type: str = "topic") -> list[str] | list[PathModule]:
    if path_type == "career":
        return fallback_career_path_modules(goal)
    return fallback_topic_path(goal)


_MODULE_STAGES = [
    ("Foundations of {name}", "Core vocabulary, tools and mental models for {name}.", 6,
     ["Terminology", "Tooling"]),
    ("{name} Essentials", "The everyday techniques every {name} practitioner relies on.", 8,
     ["Core techniques", "Best practices"]),
    ("Hands-on {name} Practice", "Guided exercises that turn {name} theory into habit.", 10,
     ["Problem solving", "Practice"]),
    ("Intermediate {name}", "Patterns and trade-offs beyond the basics of {name}.", 10,
     ["Design patterns", "Debugging"]),
    ("Advanced {name}", "Advanced methods and performance concerns in {name}.", 12,
     ["Optimization", "Architecture"]),
    ("{name} Capstone Project", "An end-to-end project that demonstrates {name} skills.", 15,
     ["Project planning", "Delivery"]),
    ("{name} in Industry", "How teams apply {name} in production settings.", 6,
     ["Collaboration", "Professional workflow"]),
    ("Career Readiness in {name}", "Portfolio, interview preparation and next steps for {name}.", 5,
     ["Portfolio building", "Interviewing"]),
]


def synthesize_career_modules(path_name: str, count: int = DEFAULT_CAREER_MODULE_COUNT) -> list[CareerModule]:
    """Deterministic module list for a career path, clamped to 5-8 modules."""
    count = max(MIN_CAREER_MODULES, min(MAX_CAREER_MODULES, count))
    modules = []
    for title, description, hours, skills in _MODULE_STAGES[:count]:
        modules.append(
            CareerModule(
                title=title.format(name=path_name),
                description=description.format(name=path_name),
                estimated_hours=hours,
                key_skills=[f"{path_name} {skill}" if i == 0 else skill for i, skill in enumerate(skills)],
            )
        )
    return modules


def fallback_career_paths(profile: UserProfile) -> list[CareerPath]:
    """Four paths derived from the profile's goal, skills and interests."""
    goal = profile.goal.strip() or "Professional Growth"
    primary_skill = profile.skills[0] if profile.skills else goal
    primary_interest = profile.interests[0] if profile.interests else goal

    blueprints = [
        (goal, f"A structured route from fundamentals to job-ready {goal} skills.",
         "beginner", "3-4 months", 95, 6),
        (f"Advanced {primary_skill}", f"Deepen your {primary_skill} expertise toward {goal}.",
         "intermediate", "2-3 months", 85, 5),
        (f"{primary_interest} Specialist", f"Combine your interest in {primary_interest} with {goal}.",
         "intermediate", "4-6 months", 75, 7),
        (f"{goal} Leadership", f"Grow into senior and leadership responsibilities in {goal}.",
         "advanced", "6-9 months", 65, 8),
    ]

    return [
        CareerPath(
            path_name=name,
            description=description,
            difficulty=difficulty,
            estimated_time_to_complete=duration,
            relevance_score=score,
            modules=synthesize_career_modules(name, module_count),
        )
        for name, description, difficulty, duration, score, module_count in blueprints
    ]
