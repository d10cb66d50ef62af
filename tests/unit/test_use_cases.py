"""Unit tests for use cases."""

from unittest.mock import AsyncMock

import pytest

from artdrill.application.dto.chat_dto import ChatMessage
from artdrill.application.use_cases.challenge.add_challenge_item import (
    AddChallengeItemUseCase,
    ChallengeItemInput,
)
from artdrill.application.use_cases.user.clear_user_record import (
    ClearUserRecordUseCase,
    cleared_fields,
)
from artdrill.application.use_cases.user.list_chat_threads import (
    ListChatThreadsUseCase,
    thread_title,
)
from artdrill.application.use_cases.user.send_chat_message import SendChatMessageUseCase
from artdrill.application.use_cases.user.update_user_record import (
    UpdateUserRecordUseCase,
    build_update_payload,
)
from artdrill.domain.exceptions import ChatUnavailable, NotFound, ValidationError
from artdrill.domain.value_objects import ArrayUnion, UserRecordKind, document

from tests.conftest import FakeDocumentStore

ANATOMY = "challenges/anatomy"
ITEMS = "challenges/anatomy/challengeItems"


# --- AddChallengeItemUseCase ---


@pytest.mark.asyncio
async def test_add_first_challenge_item_gets_order_one(store: FakeDocumentStore) -> None:
    use_case = AddChallengeItemUseCase(store)

    item_id = await use_case.execute(
        document(ANATOMY), ChallengeItemInput(title="Hands", description="Draw hands", time_limit=60)
    )

    assert store.data(f"{ITEMS}/{item_id}") == {
        "description": "Draw hands",
        "title": "Hands",
        "timeLimit": 60,
        "order": 1,
    }


@pytest.mark.asyncio
async def test_add_challenge_item_appends_after_highest_order(store: FakeDocumentStore) -> None:
    store.seed(ITEMS, docs={"a": {"order": 3}, "b": {"order": 7}, "c": {"order": 5}})
    use_case = AddChallengeItemUseCase(store)

    item_id = await use_case.execute(
        document(ANATOMY), ChallengeItemInput(title="Feet", description="Draw feet", time_limit=0)
    )

    assert store.data(f"{ITEMS}/{item_id}")["order"] == 8
    assert store.data(f"{ITEMS}/{item_id}")["timeLimit"] == 0


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "input_data",
    [
        ChallengeItemInput(title="", description="d", time_limit=30),
        ChallengeItemInput(title="t", description="", time_limit=30),
        ChallengeItemInput(title="t", description="d", time_limit="30"),
        ChallengeItemInput(title="t", description="d", time_limit=True),
    ],
)
async def test_add_challenge_item_validation(
    store: FakeDocumentStore, input_data: ChallengeItemInput
) -> None:
    with pytest.raises(ValidationError):
        await AddChallengeItemUseCase(store).execute(document(ANATOMY), input_data)
    assert store.count(ITEMS) == 0


# --- UpdateUserRecordUseCase ---


def test_badges_payload_with_new_badge_id() -> None:
    payload = build_update_payload(UserRecordKind.BADGES, {"newBadgeID": "b1", "ignored": 1})

    assert payload["badgeList"] == ArrayUnion("b1")
    assert set(payload) == {"badgeList", "lastUpdated"}


def test_badges_payload_without_new_badge_id_is_verbatim() -> None:
    payload = build_update_payload(UserRecordKind.BADGES, {"fulfilled": True})
    assert payload == {"fulfilled": True}


def test_gallery_payload_unions_and_drops_to_add_keys() -> None:
    payload = build_update_payload(
        UserRecordKind.GALLERY,
        {"artworkToAdd": ["a", "b"], "referenceToAdd": ["r"], "note": "x"},
    )

    assert payload == {
        "artworkGallery": ArrayUnion("a", "b"),
        "referenceGallery": ArrayUnion("r"),
        "note": "x",
    }


def test_gallery_payload_full_array_replaces() -> None:
    payload = build_update_payload(UserRecordKind.GALLERY, {"artworkGallery": ["only"]})
    assert payload == {"artworkGallery": ["only"]}


def test_progress_payload_maps_to_add_fields() -> None:
    payload = build_update_payload(
        UserRecordKind.PROGRESS, {"badgeListToAdd": ["b"], "toDoListToAdd": ["t"], "progress": 40}
    )
    assert payload == {
        "badgeList": ArrayUnion("b"),
        "toDoList": ArrayUnion("t"),
        "progress": 40,
    }


def test_to_add_value_must_be_list() -> None:
    with pytest.raises(ValidationError, match="artworkToAdd"):
        build_update_payload(UserRecordKind.GALLERY, {"artworkToAdd": "a.png"})


@pytest.mark.asyncio
async def test_update_gallery_appends_without_duplicates(store: FakeDocumentStore) -> None:
    store.seed("users/u1/gallery", docs={"default": {"artworkGallery": ["a"], "referenceGallery": []}})

    await UpdateUserRecordUseCase(store).execute(
        "u1", UserRecordKind.GALLERY, {"artworkToAdd": ["a", "b"]}
    )

    assert store.data("users/u1/gallery/default") == {
        "artworkGallery": ["a", "b"],
        "referenceGallery": [],
    }


@pytest.mark.asyncio
async def test_update_badges_with_new_badge(store: FakeDocumentStore) -> None:
    store.seed("users/u1/badges", docs={"default": {"badgeList": ["first"]}})

    await UpdateUserRecordUseCase(store).execute("u1", UserRecordKind.BADGES, {"newBadgeID": "second"})

    data = store.data("users/u1/badges/default")
    assert data["badgeList"] == ["first", "second"]
    assert "lastUpdated" in data


@pytest.mark.asyncio
async def test_update_missing_record_raises_not_found(store: FakeDocumentStore) -> None:
    with pytest.raises(NotFound, match="Default progress record"):
        await UpdateUserRecordUseCase(store).execute("u1", UserRecordKind.PROGRESS, {"progress": 1})


@pytest.mark.asyncio
async def test_update_empty_body_rejected(store: FakeDocumentStore) -> None:
    store.seed("users/u1/gallery", docs={"default": {}})
    with pytest.raises(ValidationError):
        await UpdateUserRecordUseCase(store).execute("u1", UserRecordKind.GALLERY, {})


# --- ClearUserRecordUseCase ---


@pytest.mark.parametrize(
    ("kind", "expected"),
    [
        (UserRecordKind.BADGES, {"badgeList": [], "fulfilled": False}),
        (UserRecordKind.GALLERY, {"artworkGallery": [], "referenceGallery": []}),
        (UserRecordKind.PROGRESS, {"badgeList": [], "progress": 0, "toDoList": []}),
        (
            UserRecordKind.PROMPTS,
            {"aiModel": "default_model", "isActive": True, "promptThread": [], "timeCreated": "now"},
        ),
    ],
)
def test_cleared_fields(kind: UserRecordKind, expected: dict) -> None:
    assert cleared_fields(kind, "now") == {**expected, "lastCleared": "now"}


@pytest.mark.asyncio
async def test_clear_progress_keeps_other_fields(store: FakeDocumentStore) -> None:
    store.seed(
        "users/u1/progress",
        docs={"default": {"badgeList": ["b"], "progress": 80, "toDoList": ["t"], "streak": 4}},
    )

    await ClearUserRecordUseCase(store).execute("u1", UserRecordKind.PROGRESS)

    data = store.data("users/u1/progress/default")
    assert data["badgeList"] == []
    assert data["progress"] == 0
    assert data["toDoList"] == []
    assert data["streak"] == 4
    assert "lastCleared" in data


@pytest.mark.asyncio
async def test_clear_missing_record_raises_not_found(store: FakeDocumentStore) -> None:
    with pytest.raises(NotFound):
        await ClearUserRecordUseCase(store).execute("u1", UserRecordKind.BADGES)


# --- SendChatMessageUseCase ---


@pytest.mark.asyncio
async def test_send_first_prompt_creates_thread(store: FakeDocumentStore, mock_chat_provider) -> None:
    use_case = SendChatMessageUseCase(store, mock_chat_provider, "gemini-2.0-flash")

    reply = await use_case.execute("u1", "Give me a gesture prompt")

    thread = store.data(f"users/u1/prompts/{reply.thread_id}")
    assert thread["aiModel"] == "gemini-2.0-flash"
    assert thread["isActive"] is True
    assert thread["promptThread"] == [
        {"role": "user", "parts": [{"text": "Give me a gesture prompt"}]},
        {"role": "model", "parts": [{"text": "Draw a cat stretching in three minutes."}]},
    ]
    assert reply.message == ChatMessage(role="model", text="Draw a cat stretching in three minutes.")
    mock_chat_provider.reply.assert_awaited_once_with([], "Give me a gesture prompt")


@pytest.mark.asyncio
async def test_send_follow_up_passes_history(store: FakeDocumentStore, mock_chat_provider) -> None:
    use_case = SendChatMessageUseCase(store, mock_chat_provider, "m")
    first = await use_case.execute("u1", "First")
    mock_chat_provider.reply.reset_mock()
    mock_chat_provider.reply.return_value = "Second answer"

    reply = await use_case.execute("u1", "Second", thread_id=first.thread_id)

    history, prompt = mock_chat_provider.reply.await_args.args
    assert [m.role for m in history] == ["user", "model"]
    assert prompt == "Second"
    assert reply.thread_id == first.thread_id
    assert len(store.data(f"users/u1/prompts/{first.thread_id}")["promptThread"]) == 4


@pytest.mark.asyncio
async def test_send_to_missing_thread_raises_not_found(store: FakeDocumentStore, mock_chat_provider) -> None:
    use_case = SendChatMessageUseCase(store, mock_chat_provider, "m")

    with pytest.raises(NotFound, match="Chat thread"):
        await use_case.execute("u1", "Hi", thread_id="nope")
    mock_chat_provider.reply.assert_not_awaited()


@pytest.mark.asyncio
@pytest.mark.parametrize("prompt", ["", "   ", None, 42])
async def test_send_empty_prompt_rejected(store: FakeDocumentStore, mock_chat_provider, prompt) -> None:
    with pytest.raises(ValidationError):
        await SendChatMessageUseCase(store, mock_chat_provider, "m").execute("u1", prompt)
    assert store.count("users/u1/prompts") == 0


@pytest.mark.asyncio
async def test_provider_failure_keeps_user_message(store: FakeDocumentStore) -> None:
    provider = AsyncMock()
    provider.reply.side_effect = RuntimeError("quota exceeded")
    use_case = SendChatMessageUseCase(store, provider, "m")

    with pytest.raises(ChatUnavailable):
        await use_case.execute("u1", "Prompt please")

    (thread,) = store._collections["users/u1/prompts"].values()
    assert thread["promptThread"] == [{"role": "user", "parts": [{"text": "Prompt please"}]}]


# --- ListChatThreadsUseCase ---


def test_thread_title_variants() -> None:
    assert thread_title([]) == "New Chat"
    assert thread_title(None) == "New Chat"
    assert thread_title([{"role": "user", "parts": [{"text": "Short"}]}]) == "Short"
    assert thread_title([{"role": "user", "parts": [{"text": "x" * 50}]}]) == "x" * 50
    long_title = thread_title([{"role": "user", "parts": [{"text": "y" * 51}]}])
    assert long_title == "y" * 47 + "..."


@pytest.mark.asyncio
async def test_list_threads_newest_first(store: FakeDocumentStore) -> None:
    store.seed(
        "users/u1/prompts",
        docs={
            "old": {"timeCreated": "2026-01-01T00:00:00+00:00", "promptThread": []},
            "new": {
                "timeCreated": "2026-02-01T00:00:00+00:00",
                "promptThread": [{"role": "user", "parts": [{"text": "Perspective"}]}],
            },
        },
    )

    threads = await ListChatThreadsUseCase(store).execute("u1")

    assert [(t.id, t.title) for t in threads] == [("new", "Perspective"), ("old", "New Chat")]
