"""
Prompt templates for every content generator.

Each template ends with the exact JSON shape expected back; the generators
validate against the same shape.
"""
from __future__ import annotations

from .classifier import TopicClassification

# =============================================================================
# Module Content
# =============================================================================

MODULE_CONTENT_PROMPT = """Create educational content for: "{module_name}"
Type: {type_label}
Level: {level}
Sections: exactly {section_count}

{technical_rules}
Every section "content" must be at least three full sentences.

Return a JSON object strictly following this structure:
{{
  "title": "{module_name}",
  "type": "{content_type}",
  "sections": [
    {{
      "title": "Section Title",
      "content": "Detailed explanation",
      "keyPoints": ["Key point 1", "Key point 2"],
      "codeExample": {code_example}
    }}
  ]
}}
Return ONLY valid JSON, no markdown."""

TECHNICAL_RULES = """Important: EVERY section must include:
- Practical code examples with explanations
- Working code snippets that demonstrate concepts
- Best practices and common patterns
- Error handling where relevant
"""

CODE_EXAMPLE_SHAPE = """{{
        "language": "{language}",
        "code": "// working code here",
        "explanation": "Explain how the code works"
      }}"""


def module_content_prompt(module_name: str, classification: TopicClassification, detailed: bool) -> str:
    if classification.is_technical:
        technical_rules = TECHNICAL_RULES
        code_example = CODE_EXAMPLE_SHAPE.format(language=classification.suggested_language)
    else:
        technical_rules = ""
        code_example = "null"

    return MODULE_CONTENT_PROMPT.format(
        module_name=module_name,
        type_label="Technical/Programming" if classification.is_technical else "General",
        level="Advanced" if detailed else "Basic",
        section_count=4 if detailed else 3,
        technical_rules=technical_rules,
        content_type=classification.content_type,
        code_example=code_example,
    )


# =============================================================================
# Flashcards
# =============================================================================

FLASHCARD_PROMPT = """Generate {count} educational flashcards on "{topic}" with increasing difficulty.

Requirements:
- The front side (question) must be short and clear.
- The back side (answer) must be detailed (3-4 sentences) and informative.
- Difficulty increases from flashcard 1 to {count}:
  - Start with basic concepts.
  - Progress to intermediate details.
  - End with advanced questions requiring deeper understanding.
- Format the response strictly as a JSON array of exactly {count} objects:

[
  {{ "id": 1, "frontHTML": "Basic question?", "backHTML": "Detailed easy explanation." }},
  {{ "id": {count}, "frontHTML": "Advanced question?", "backHTML": "Detailed advanced explanation." }}
]"""


def flashcard_prompt(topic: str, count: int) -> str:
    return FLASHCARD_PROMPT.format(topic=topic, count=count)


# =============================================================================
# Quizzes
# =============================================================================

TOPIC_QUIZ_PROMPT = """Generate a quiz on "{topic}" with exactly {count} questions.
{grounding}
Requirements:
- Each question should be clear and well-structured.
- Mix single-choice and multiple-choice questions.
- Provide exactly 4 answer options for each question.
- Clearly indicate the correct answer(s) using the exact option text.
- Give a short explanation for the correct answer.
- Assign 10 points per question.
- Format the response as a JSON array:

[
  {{
    "question": "Example question?",
    "questionType": "single",
    "answers": ["Option A", "Option B", "Option C", "Option D"],
    "correctAnswer": "Option A",
    "explanation": "Short explanation here.",
    "point": 10
  }},
  {{
    "question": "Another example?",
    "questionType": "multiple",
    "answers": ["Option A", "Option B", "Option C", "Option D"],
    "correctAnswer": ["Option B", "Option C"],
    "explanation": "Short explanation here.",
    "point": 10
  }}
]"""

GROUNDING_BLOCK = """
Base every question on the following learning material:
---
{content}
---
"""


def topic_quiz_prompt(topic: str, count: int, grounding: str | None = None) -> str:
    block = GROUNDING_BLOCK.format(content=grounding) if grounding else ""
    return TOPIC_QUIZ_PROMPT.format(topic=topic, count=count, grounding=block)


MODULE_QUIZ_PROMPT = """Generate a {count}-question quiz for the topic: "{module_name}" with 4 options each and the correct answer marked.

Requirements:
- Each question should test understanding of {module_name} concepts
- Include a mix of difficulty levels (basic to advanced)
- Provide exactly 4 answer options for each question
- correctIndex is the 0-based index of the correct option
- Format as a JSON object:

{{
  "questions": [
    {{
      "question": "Question text here?",
      "options": ["Option A", "Option B", "Option C", "Option D"],
      "correctIndex": 0,
      "explanation": "Brief explanation of why this is correct"
    }}
  ]
}}"""


def module_quiz_prompt(module_name: str, count: int = 5) -> str:
    return MODULE_QUIZ_PROMPT.format(module_name=module_name, count=count)


# =============================================================================
# Learning Paths
# =============================================================================

TOPIC_PATH_PROMPT = """Generate a comprehensive learning path for: "{goal}"
Requirements:
- Create exactly 5 progressive modules
- Each module should build upon previous knowledge
- Focus on practical, hands-on learning
- Include both theoretical and practical aspects

Return ONLY a JSON array with exactly 5 strings in this format:
["Module 1: [Clear Title]", "Module 2: [Clear Title]", "Module 3: [Clear Title]", "Module 4: [Clear Title]", "Module 5: [Clear Title]"]"""

CAREER_PATH_MODULES_PROMPT = """Create a structured learning path for someone who wants to learn about "{goal}".
Design a series of modules (between 5-7) that progressively build knowledge from basics to advanced concepts.
{depth}
Return the result as a JSON array with this structure:
[
  {{
    "title": "Module title",
    "description": "Brief description of what will be covered in this module",
    "estimatedTime": "Estimated time to complete (e.g., '2-3 hours')",
    "content": "Detailed content overview with key points to learn"
  }}
]

Make sure the content is comprehensive, accurate, and follows a logical progression from fundamentals to more complex topics."""


def learning_path_prompt(goal: str, path_type: str, detailed: bool = False) -> str:
    if path_type == "career":
        depth = "Give each module a detailed content overview.\n" if detailed else ""
        return CAREER_PATH_MODULES_PROMPT.format(goal=goal, depth=depth)
    return TOPIC_PATH_PROMPT.format(goal=goal)


CAREER_PATHS_PROMPT = """You are a career advisor. Suggest exactly {count} personalized learning paths for this learner.

Learner profile:
- Name: {name}
- Career goal: {goal}
- Current skills: {skills}
- Interests: {interests}

Each path must contain between 5 and 8 modules, ordered from fundamentals to advanced.
relevanceScore is an integer from 0 to 100 describing how well the path fits the profile.
difficulty is one of "beginner", "intermediate" or "advanced".

Return ONLY a JSON array:
[
  {{
    "pathName": "Path name",
    "description": "Why this path fits the learner",
    "difficulty": "intermediate",
    "estimatedTimeToComplete": "3 months",
    "relevanceScore": 90,
    "modules": [
      {{
        "title": "Module title",
        "description": "What the module covers",
        "estimatedHours": 10,
        "keySkills": ["Skill 1", "Skill 2"]
      }}
    ]
  }}
]"""


def career_paths_prompt(name: str, goal: str, skills: list[str], interests: list[str], count: int = 4) -> str:
    return CAREER_PATHS_PROMPT.format(
        count=count,
        name=name or "Learner",
        goal=goal,
        skills=", ".join(skills) or "none listed",
        interests=", ".join(interests) or "none listed",
    )


# =============================================================================
# Chat
# =============================================================================

CHAT_PROMPT = """Context:
Topic: {topic}
Level: {level}
Focus: {focus}

Be concise and helpful. Answer the following: {message}"""
