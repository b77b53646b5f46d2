"""
Unit tests for the content generators.

Providers are scripted fakes (see conftest); the retry delay is zero.
"""

import json

import pytest

from skillpath.exceptions import GenerationExhaustedError, InvalidInputError, ProviderError
from skillpath.generation import (
    ChatContext,
    ChatGenerator,
    ModuleContentGenerator,
    PathGenerator,
    StudyGenerator,
    normalize_career_path,
)
from skillpath.generation.paths import clamp_relevance, coerce_difficulty, finalize_career_paths
from skillpath.models import ModuleContent, PathModule, Section, TopicQuizQuestion, UserProfile
from skillpath.providers import ProviderId

SECTION_BODY = "A binary search tree keeps smaller keys on the left and larger keys on the right."


def _module_content_json(sections=3, content_type="general"):
    return json.dumps(
        {
            "title": "Binary Search Trees",
            "type": content_type,
            "sections": [
                {
                    "title": f"Part {i}",
                    "content": SECTION_BODY,
                    "keyPoints": ["Ordered keys", "Logarithmic search"],
                    "codeExample": None,
                }
                for i in range(1, sections + 1)
            ],
        }
    )


def _flashcards_json(count):
    return json.dumps([{"id": 99 - i, "frontHTML": f"Q{i}?", "backHTML": f"A{i}."} for i in range(count)])


def _career_path(name, **overrides):
    path = {
        "pathName": name,
        "description": f"{name} description",
        "difficulty": "beginner",
        "estimatedTimeToComplete": "3 months",
        "relevanceScore": 80,
        "modules": [
            {"title": f"{name} module {i}", "description": "d", "estimatedHours": 4, "keySkills": ["s"]}
            for i in range(6)
        ],
    }
    path.update(overrides)
    return path


@pytest.fixture
def profile():
    return UserProfile(name="Ada", goal="Data Engineer", skills=["Python"], interests=["Databases"])


# ========================================
# Module Content
# ========================================


class TestModuleContentGenerator:
    @pytest.mark.asyncio
    async def test_binary_search_trees_three_sections(self, make_adapter):
        """A valid 3-section response is returned unmodified with its type preserved."""
        adapter = make_adapter(groq=[_module_content_json(3, content_type="technical")])

        content = await ModuleContentGenerator(adapter).generate("binary search trees", detailed=False)

        assert isinstance(content, ModuleContent)
        assert content.type == "technical"
        assert content.title == "Binary Search Trees"
        assert len(content.sections) == 3
        assert all(section.content == SECTION_BODY for section in content.sections)
        assert content.sections[0].key_points == ["Ordered keys", "Logarithmic search"]
        assert content.sections[0].code_example is None

    @pytest.mark.asyncio
    async def test_prompt_requests_section_count(self, make_adapter):
        adapter = make_adapter(groq=[_module_content_json(4)])

        await ModuleContentGenerator(adapter).generate("Python generators", detailed=True)

        prompt = adapter.providers[ProviderId.GROQ].calls[0][1]
        assert "Sections: exactly 4" in prompt
        assert '"language": "python"' in prompt

    @pytest.mark.asyncio
    async def test_secondary_family_used_before_retrying(self, make_adapter):
        """Fast family exhaustion falls back to the secondary family within one attempt."""
        adapter = make_adapter(
            groq=[ProviderError("429"), ProviderError("429")],
            gemini=[_module_content_json(3)],
        )

        content = await ModuleContentGenerator(adapter).generate("binary search trees")

        assert len(content.sections) == 3
        assert len(adapter.providers[ProviderId.GEMINI].calls) == 1

    @pytest.mark.asyncio
    async def test_retries_after_invalid_content(self, make_adapter):
        short = json.dumps({"title": "T", "type": "general", "sections": [{"title": "S", "content": "too short"}]})
        adapter = make_adapter(groq=[short, _module_content_json(3)])

        content = await ModuleContentGenerator(adapter).generate("binary search trees")

        assert len(content.sections) == 3
        assert len(adapter.providers[ProviderId.GROQ].calls) == 2

    @pytest.mark.asyncio
    async def test_exhaustion_raises_with_cause(self, make_adapter, policy):
        adapter = make_adapter(groq_default="no json", gemini_default="still no json")

        with pytest.raises(GenerationExhaustedError) as exc_info:
            await ModuleContentGenerator(adapter, policy).generate("binary search trees")

        assert exc_info.value.__cause__ is not None
        # The fast family answers with bad text on every attempt
        assert len(adapter.providers[ProviderId.GROQ].calls) == policy.max_retries

    @pytest.mark.asyncio
    async def test_retry_bound_follows_policy(self, failing_adapter, policy):
        generator = ModuleContentGenerator(failing_adapter, policy.replace(max_retries=1))

        with pytest.raises(GenerationExhaustedError):
            await generator.generate("binary search trees")

        # Two models in the fast ladder, one attempt
        assert len(failing_adapter.providers[ProviderId.GROQ].calls) == 2

    @pytest.mark.asyncio
    async def test_sanitizes_section_fields(self, make_adapter):
        raw = {
            "title": "Hooks",
            "type": "unknown",
            "sections": [
                {
                    "title": "`useState`",
                    "content": "```" + SECTION_BODY + "\\nSecond line```",
                    "keyPoints": ["`state`"],
                    "codeExample": {"code": "```js\nconst [a, setA] = useState(0);\n```"},
                }
            ],
        }
        adapter = make_adapter(groq=[json.dumps(raw)])

        content = await ModuleContentGenerator(adapter).generate("React Hooks")

        section = content.sections[0]
        assert content.type == "technical"
        assert section.title == "useState"
        assert section.content == SECTION_BODY + "\nSecond line"
        assert section.key_points == ["state"]
        assert section.code_example.code == "const [a, setA] = useState(0);"

    @pytest.mark.asyncio
    async def test_empty_module_name_rejected_before_network(self, make_adapter):
        adapter = make_adapter()

        with pytest.raises(InvalidInputError):
            await ModuleContentGenerator(adapter).generate("  ")
        assert adapter.providers[ProviderId.GROQ].calls == []


# ========================================
# Flashcards & Quizzes
# ========================================


class TestFlashcards:
    @pytest.mark.asyncio
    async def test_react_hooks_unparsable_falls_back(self, garbage_adapter):
        cards = await StudyGenerator(garbage_adapter).generate_flashcards("React Hooks", 5)

        assert len(cards) == 5
        assert [card.id for card in cards] == [1, 2, 3, 4, 5]
        assert all("React Hooks" in card.front_html for card in cards)

    @pytest.mark.asyncio
    async def test_success_renumbers_ids(self, make_adapter):
        adapter = make_adapter(groq=[_flashcards_json(4)])

        cards = await StudyGenerator(adapter).generate_flashcards("Git", 4)

        assert [card.id for card in cards] == [1, 2, 3, 4]
        assert cards[0].front_html == "Q0?"

    @pytest.mark.asyncio
    async def test_wrong_count_falls_back(self, make_adapter):
        adapter = make_adapter(groq=[_flashcards_json(3)])

        cards = await StudyGenerator(adapter).generate_flashcards("Git", 5)

        assert len(cards) == 5
        assert all("Git" in card.front_html for card in cards)

    @pytest.mark.asyncio
    async def test_provider_failure_falls_back(self, failing_adapter):
        cards = await StudyGenerator(failing_adapter).generate_flashcards("Docker", 3)

        assert [card.id for card in cards] == [1, 2, 3]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(("topic", "count"), [("", 5), (None, 5), ("Git", 0), ("Git", -1)])
    async def test_invalid_input(self, make_adapter, topic, count):
        with pytest.raises(InvalidInputError):
            await StudyGenerator(make_adapter()).generate_flashcards(topic, count)


class TestTopicQuiz:
    def _questions(self, count):
        return json.dumps(
            [
                {
                    "question": f"Question {i}?",
                    "questionType": "multiple" if i % 2 else "single",
                    "answers": ["A", "B", "C", "D"],
                    "correctAnswer": ["A", "C"] if i % 2 else "B",
                    "explanation": "Because.",
                    "point": 10,
                }
                for i in range(count)
            ]
        )

    @pytest.mark.asyncio
    async def test_success(self, make_adapter):
        adapter = make_adapter(groq=[self._questions(4)])

        quiz = await StudyGenerator(adapter).generate_quiz_data("SQL", 4)

        assert quiz.nr_of_questions == "4"
        assert len(quiz.questions) == 4
        assert quiz.questions[1].question_type == "multiple"
        assert quiz.questions[1].correct_answers == ["A", "C"]

    def test_overflowing_point_uses_default(self):
        question = TopicQuizQuestion.from_dict(
            {"question": "Q?", "answers": ["A", "B"], "correctAnswer": "A", "point": float("inf")}
        )

        assert question.point == 10

    @pytest.mark.asyncio
    async def test_non_finite_point_falls_back(self, make_adapter):
        text = self._questions(3).replace('"point": 10', '"point": 1e400')
        adapter = make_adapter(groq_default=text, gemini_default=text)

        quiz = await StudyGenerator(adapter).generate_quiz_data("SQL", 3)

        assert len(quiz.questions) == 3
        assert all(q.question != "Question 0?" for q in quiz.questions)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("count", [1, 5, 10])
    async def test_failure_preserves_count(self, garbage_adapter, count):
        quiz = await StudyGenerator(garbage_adapter).generate_quiz_data("SQL", count)

        assert len(quiz.questions) == count
        assert quiz.nr_of_questions == str(count)
        assert all(q.question_type == "single" for q in quiz.questions)
        assert all(q.correct_answer == q.answers[0] for q in quiz.questions)

    @pytest.mark.asyncio
    async def test_grounding_truncated_to_budget(self, make_adapter, policy):
        adapter = make_adapter(groq=[self._questions(2)])
        generator = StudyGenerator(adapter, policy.replace(grounding_char_budget=100))

        await generator.generate_quiz_data("SQL", 2, module_content="G" * 1000)

        prompt = adapter.providers[ProviderId.GROQ].calls[0][1]
        assert "G" * 100 in prompt
        assert "G" * 101 not in prompt

    @pytest.mark.asyncio
    async def test_module_content_object_as_grounding(self, make_adapter):
        adapter = make_adapter(groq=[self._questions(1)])
        content = ModuleContent(
            title="Joins",
            type="technical",
            sections=[Section(title="Inner joins", content="Rows matching in both tables.")],
        )

        await StudyGenerator(adapter).generate_quiz_data("SQL", 1, module_content=content)

        prompt = adapter.providers[ProviderId.GROQ].calls[0][1]
        assert "Rows matching in both tables." in prompt


class TestModuleQuiz:
    @pytest.mark.asyncio
    async def test_success(self, make_adapter):
        quiz = {
            "questions": [
                {"question": f"Q{i}?", "options": ["a", "b", "c", "d"], "correctIndex": i % 4, "explanation": "e"}
                for i in range(5)
            ]
        }
        adapter = make_adapter(groq=["```json\n" + json.dumps(quiz) + "\n```"])

        result = await StudyGenerator(adapter).generate_quiz("Subnetting")

        assert len(result.questions) == 5
        assert result.questions[3].correct_index == 3

    @pytest.mark.asyncio
    async def test_failure_returns_fixed_five(self, garbage_adapter):
        result = await StudyGenerator(garbage_adapter).generate_quiz("Subnetting")

        assert len(result.questions) == 5
        assert result.questions[0].question == "What is the main focus of Subnetting?"


# ========================================
# Learning & Career Paths
# ========================================


class TestLearningPath:
    @pytest.mark.asyncio
    async def test_ux_design_topic_fallback(self, failing_adapter):
        modules = await PathGenerator(failing_adapter).generate_learning_path("UX Design", type="topic")

        assert len(modules) == 5
        for index, module in enumerate(modules, start=1):
            assert module.startswith(f"Module {index}: ")

    @pytest.mark.asyncio
    async def test_topic_success(self, make_adapter):
        titles = [f"Module {i}: Step {i}" for i in range(1, 6)]
        adapter = make_adapter(groq=[json.dumps(titles)])

        assert await PathGenerator(adapter).generate_learning_path("UX Design") == titles

    @pytest.mark.asyncio
    async def test_topic_success_is_renumbered_and_cleaned(self, make_adapter):
        titles = ["`User Research`", "Module 7: Personas", "module 3 - Wireframes", "Prototyping", "Usability Testing"]
        adapter = make_adapter(groq=[json.dumps(titles)])

        modules = await PathGenerator(adapter).generate_learning_path("UX Design")

        assert modules == [
            "Module 1: User Research",
            "Module 2: Personas",
            "Module 3: Wireframes",
            "Module 4: Prototyping",
            "Module 5: Usability Testing",
        ]

    @pytest.mark.asyncio
    async def test_topic_wrong_length_falls_back(self, make_adapter):
        adapter = make_adapter(groq=[json.dumps(["Module 1: Only one"])])

        modules = await PathGenerator(adapter).generate_learning_path("UX Design")

        assert modules[0] == "Module 1: Introduction to UX Design"

    @pytest.mark.asyncio
    async def test_career_success_fills_defaults(self, make_adapter):
        raw = [{"title": "Research"}, {"title": "Wireframing", "estimatedTime": "3 hours", "content": "c"}]
        adapter = make_adapter(groq=[json.dumps(raw)])

        modules = await PathGenerator(adapter).generate_learning_path("UX Design", type="career")

        assert all(isinstance(module, PathModule) for module in modules)
        assert modules[0].estimated_time == "1-2 hours"
        assert modules[0].description == "Learn about UX Design"
        assert modules[1].estimated_time == "3 hours"

    @pytest.mark.asyncio
    async def test_career_provider_failures_are_retried(self, make_adapter, policy):
        raw = json.dumps([{"title": "Research"}])
        adapter = make_adapter(
            groq=[ProviderError("down"), ProviderError("down")],
            gemini=[ProviderError("down"), raw],
        )

        modules = await PathGenerator(adapter, policy).generate_learning_path("UX Design", type="career")

        assert modules[0].title == "Research"

    @pytest.mark.asyncio
    async def test_career_total_failure_falls_back(self, failing_adapter):
        modules = await PathGenerator(failing_adapter).generate_learning_path("UX Design", type="career")

        assert len(modules) == 5
        assert modules[0].title == "Introduction to UX Design"

    @pytest.mark.asyncio
    async def test_career_unparsable_falls_back(self, garbage_adapter):
        modules = await PathGenerator(garbage_adapter).generate_learning_path("UX Design", type="career")

        assert modules[-1].title == "UX Design in the Real World"

    @pytest.mark.asyncio
    async def test_unknown_type_rejected(self, make_adapter):
        with pytest.raises(InvalidInputError):
            await PathGenerator(make_adapter()).generate_learning_path("UX Design", type="course")


class TestCareerPathPostprocessing:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [(150, 100), (-10, 0), (72.6, 73), ("88", 88), (None, 0), ("n/a", 0), (float("inf"), 0), (float("nan"), 0)],
    )
    def test_clamp_relevance(self, raw, expected):
        assert clamp_relevance(raw) == expected

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("expert", "intermediate"), ("Advanced", "advanced"), (None, "intermediate"), ("beginner", "beginner")],
    )
    def test_coerce_difficulty(self, raw, expected):
        assert coerce_difficulty(raw) == expected

    def test_normalize_clamps_and_coerces(self):
        path = normalize_career_path(_career_path("Data", relevanceScore=150, difficulty="expert"))

        assert path.relevance_score == 100
        assert path.difficulty == "intermediate"

    def test_negative_score_clamped(self):
        assert normalize_career_path(_career_path("Data", relevanceScore=-10)).relevance_score == 0

    def test_missing_modules_synthesized(self):
        path = normalize_career_path(_career_path("Cloud", modules=None))

        assert len(path.modules) == 6
        assert path.modules[0].title == "Foundations of Cloud"

    def test_short_modules_back_filled(self):
        path = normalize_career_path(_career_path("Cloud", modules=[{"title": "Kickoff"}]))

        assert len(path.modules) == 5
        assert path.modules[0].title == "Kickoff"
        assert path.modules[0].estimated_hours == 10

    def test_overflowing_module_hours_use_default(self):
        modules = [{"title": "Kickoff", "estimatedHours": float("inf")}]
        path = normalize_career_path(_career_path("Cloud", modules=modules))

        assert path.modules[0].estimated_hours == 10

    def test_long_modules_truncated(self):
        modules = [{"title": f"M{i}"} for i in range(12)]
        assert len(normalize_career_path(_career_path("Cloud", modules=modules)).modules) == 8

    def test_finalize_pads_to_four(self, profile):
        paths = finalize_career_paths([_career_path("Data Engineer"), _career_path("Analytics")], profile)

        assert len(paths) == 4
        names = [path.path_name for path in paths]
        assert names[:2] == ["Data Engineer", "Analytics"]
        assert len(set(names)) == 4

    def test_finalize_truncates_to_four(self, profile):
        paths = finalize_career_paths([_career_path(f"Path {i}") for i in range(6)], profile)

        assert [path.path_name for path in paths] == ["Path 0", "Path 1", "Path 2", "Path 3"]

    def test_finalize_accepts_wrapped_object(self, profile):
        paths = finalize_career_paths({"paths": [_career_path(f"Path {i}") for i in range(4)]}, profile)

        assert len(paths) == 4


class TestCareerPathGenerator:
    @pytest.mark.asyncio
    async def test_success(self, make_adapter, profile):
        raw = [_career_path(f"Path {i}", relevanceScore=150 if i == 0 else 70) for i in range(4)]
        adapter = make_adapter(groq=[json.dumps(raw)])

        paths = await PathGenerator(adapter).generate_career_paths(profile)

        assert len(paths) == 4
        assert paths[0].relevance_score == 100
        prompt = adapter.providers[ProviderId.GROQ].calls[0][1]
        assert "Data Engineer" in prompt
        assert "Python" in prompt

    @pytest.mark.asyncio
    async def test_infinite_relevance_falls_back(self, make_adapter, profile):
        raw = json.dumps([_career_path(f"Path {i}") for i in range(4)])
        text = raw.replace('"relevanceScore": 80', '"relevanceScore": Infinity')
        adapter = make_adapter(groq_default=text, gemini_default=text)

        paths = await PathGenerator(adapter).generate_career_paths(profile)

        assert len(paths) == 4
        assert paths[1].path_name == "Advanced Python"

    @pytest.mark.asyncio
    async def test_total_failure_returns_profile_fallback(self, garbage_adapter, profile):
        paths = await PathGenerator(garbage_adapter).generate_career_paths(profile)

        assert len(paths) == 4
        assert paths[1].path_name == "Advanced Python"

    @pytest.mark.asyncio
    async def test_invalid_profile(self, make_adapter):
        generator = PathGenerator(make_adapter())

        with pytest.raises(InvalidInputError):
            await generator.generate_career_paths(UserProfile(name="Ada", goal=" "))
        with pytest.raises(InvalidInputError):
            await generator.generate_career_paths({"goal": "Data"})


# ========================================
# Chat
# ========================================


class TestChatGenerator:
    @pytest.mark.asyncio
    async def test_returns_raw_text(self, make_adapter):
        adapter = make_adapter(groq=["  A closure captures variables.\n"])

        reply = await ChatGenerator(adapter).generate_chat_response("What is a closure?")

        assert reply == "  A closure captures variables.\n"

    @pytest.mark.asyncio
    async def test_context_defaults(self, make_adapter):
        adapter = make_adapter(groq=["ok"])

        await ChatGenerator(adapter).generate_chat_response("Hi", ChatContext(topic="JavaScript"))

        prompt = adapter.providers[ProviderId.GROQ].calls[0][1]
        assert "Topic: JavaScript" in prompt
        assert "Level: Intermediate" in prompt
        assert "Focus: General understanding" in prompt
        assert prompt.endswith("Answer the following: Hi")

    @pytest.mark.asyncio
    async def test_failure_propagates(self, failing_adapter):
        with pytest.raises(GenerationExhaustedError) as exc_info:
            await ChatGenerator(failing_adapter).generate_chat_response("Hi")

        assert "no scripted response" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_single_shot(self, failing_adapter):
        with pytest.raises(GenerationExhaustedError):
            await ChatGenerator(failing_adapter).generate_chat_response("Hi")

        assert len(failing_adapter.providers[ProviderId.GROQ].calls) == 2
        assert len(failing_adapter.providers[ProviderId.GEMINI].calls) == 0


# ========================================
# Module-level API
# ========================================


class TestModuleLevelApi:
    @pytest.mark.asyncio
    async def test_flashcards_close_adapter(self, make_adapter, monkeypatch):
        from skillpath.generation import api

        adapter = make_adapter(groq=[_flashcards_json(2)])
        monkeypatch.setattr(api, "build_adapter", lambda: adapter)

        cards = await api.generate_flashcards("React Hooks", 2)

        assert [card.id for card in cards] == [1, 2]
        assert all(provider.closed for provider in adapter.providers.values())

    @pytest.mark.asyncio
    async def test_chat_failure_still_closes_adapter(self, failing_adapter, monkeypatch):
        from skillpath.generation import api

        monkeypatch.setattr(api, "build_adapter", lambda: failing_adapter)

        with pytest.raises(GenerationExhaustedError):
            await api.generate_chat_response("What is a closure?")
        assert all(provider.closed for provider in failing_adapter.providers.values())
