"""
Tests unitaires pour la conversion des messages vers le format Gemini.
"""
from chat_relay.core.models import ChatMessage
from chat_relay.proxy.transformers import build_safety_settings, convert_to_gemini_turns


def msgs(*pairs):
    return [ChatMessage(role=role, content=content) for role, content in pairs]


def as_tuples(conversion):
    return [(turn.role, turn.parts[0]["text"]) for turn in conversion.turns]


class TestConvertToGeminiTurns:
    """Tests de convert_to_gemini_turns."""

    def test_simple_user_message(self):
        conversion = convert_to_gemini_turns(msgs(("user", "Bonjour")))

        assert as_tuples(conversion) == [("user", "Bonjour")]
        assert conversion.repaired is False
        assert conversion.discarded == 0

    def test_assistant_becomes_model(self):
        conversion = convert_to_gemini_turns(msgs(
            ("user", "Q1"), ("assistant", "R1"), ("user", "Q2")
        ))
        assert as_tuples(conversion) == [("user", "Q1"), ("model", "R1"), ("user", "Q2")]

    def test_consecutive_user_messages_get_model_filler(self):
        """[user A, user B] → user A, model "Okay.", user B."""
        conversion = convert_to_gemini_turns(msgs(("user", "A"), ("user", "B")))

        assert as_tuples(conversion) == [("user", "A"), ("model", "Okay."), ("user", "B")]
        assert conversion.repaired is False

    def test_consecutive_assistant_messages_get_user_filler(self):
        conversion = convert_to_gemini_turns(msgs(
            ("user", "Q"), ("assistant", "R1"), ("assistant", "R2")
        ))
        assert as_tuples(conversion) == [
            ("user", "Q"), ("model", "R1"), ("user", "Understood."), ("model", "R2")
        ]

    def test_system_messages_are_removed(self):
        """Les messages system sortent de l'historique mais sont conservés à part."""
        conversion = convert_to_gemini_turns(msgs(
            ("system", "Sois concis"), ("user", "Q"), ("system", "En français")
        ))

        assert as_tuples(conversion) == [("user", "Q")]
        assert conversion.system_messages == ["Sois concis", "En français"]

    def test_system_between_same_roles_still_gets_filler(self):
        conversion = convert_to_gemini_turns(msgs(
            ("user", "A"), ("system", "S"), ("user", "B")
        ))
        assert as_tuples(conversion) == [("user", "A"), ("model", "Okay."), ("user", "B")]

    def test_turns_always_alternate(self):
        conversion = convert_to_gemini_turns(msgs(
            ("user", "1"), ("user", "2"), ("assistant", "3"),
            ("assistant", "4"), ("user", "5"), ("user", "6")
        ))
        roles = [turn.role for turn in conversion.turns]

        assert roles[0] == "user"
        assert all(a != b for a, b in zip(roles, roles[1:]))

    def test_history_starting_with_assistant_falls_back_to_last_user(self):
        """Historique ne commençant pas par user → dernier message user seul."""
        conversion = convert_to_gemini_turns(msgs(
            ("assistant", "Salut"), ("user", "Q1"), ("assistant", "R1"), ("user", "Q2")
        ))

        assert as_tuples(conversion) == [("user", "Q2")]
        assert conversion.repaired is True
        assert conversion.discarded == 3

    def test_no_user_message_falls_back_to_hello(self):
        """[system X, assistant A] → un seul tour user "Hello"."""
        conversion = convert_to_gemini_turns(msgs(("system", "X"), ("assistant", "A")))

        assert as_tuples(conversion) == [("user", "Hello")]
        assert conversion.repaired is True
        assert conversion.discarded == 1
        assert conversion.system_messages == ["X"]

    def test_only_system_messages_falls_back_to_hello(self):
        conversion = convert_to_gemini_turns(msgs(("system", "X")))

        assert as_tuples(conversion) == [("user", "Hello")]
        assert conversion.repaired is True
        assert conversion.discarded == 0

    def test_input_is_not_mutated(self):
        messages = msgs(("user", "A"), ("user", "B"))
        convert_to_gemini_turns(messages)
        assert messages == msgs(("user", "A"), ("user", "B"))


class TestBuildSafetySettings:
    """Tests des seuils de sécurité Gemini."""

    def test_four_categories_at_medium(self):
        settings = build_safety_settings()

        assert len(settings) == 4
        assert {s["category"] for s in settings} == {
            "HARM_CATEGORY_HARASSMENT",
            "HARM_CATEGORY_HATE_SPEECH",
            "HARM_CATEGORY_SEXUALLY_EXPLICIT",
            "HARM_CATEGORY_DANGEROUS_CONTENT",
        }
        assert all(s["threshold"] == "BLOCK_MEDIUM_AND_ABOVE" for s in settings)
