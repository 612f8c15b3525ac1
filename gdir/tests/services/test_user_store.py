import json

import pytest

from gdir.config import GdirContext
from gdir.crypto.record_cipher import decrypt_record, derive_record_name
from gdir.exceptions import UserNotFoundError
from gdir.models.access import AccessMode, AccessState, Append, Confirm, Convert
from gdir.models.user import User
from gdir.services.access_control import AccessSession
from gdir.services.user_store import UserStore


@pytest.fixture
def users(context: GdirContext) -> UserStore:
    return UserStore(context)


def test_user_store_save_writes_user_record_at_derived_path(
    users: UserStore, context: GdirContext
) -> None:
    path = users.save(User(name="alice", password="pw"))

    assert path == context.users_path / derive_record_name(context.secret, "alice")
    document = json.loads(decrypt_record(context.secret, "user", path.read_bytes()))
    assert document["Name"] == "alice"
    assert document["Pass"] == "pw"


def test_user_store_load_round_trip(users: UserStore) -> None:
    user = User(name="alice", password="pw", allow_list=("d1", "d2"))
    users.save(user)

    assert users.load("alice") == user


def test_user_store_load_missing_raises_user_not_found(users: UserStore) -> None:
    with pytest.raises(UserNotFoundError) as exc_info:
        users.load("nobody")

    assert exc_info.value.name == "nobody"


def test_user_store_lookup_uses_path_not_stored_name(
    users: UserStore, context: GdirContext
) -> None:
    """Test that lookup goes through the derived path, so names are case sensitive."""
    path = users.path_for("alice")
    users.save(User(name="alice", password="pw"))
    stored = users.load_path(path)

    assert stored.name == "alice"
    with pytest.raises(UserNotFoundError):
        users.load("Alice")


def test_user_store_load_for_edit_new_user(users: UserStore) -> None:
    existing, draft = users.load_for_edit("alice")

    assert existing is None
    assert draft == User(name="alice")


def test_user_store_load_for_edit_carries_lists_only(users: UserStore) -> None:
    users.save(User(name="alice", password="pw", block_list=("d1",)))

    existing, draft = users.load_for_edit("alice")

    assert existing is not None
    assert existing.password == "pw"
    assert draft == User(name="alice", block_list=("d1",))


def test_user_store_list_users(users: UserStore) -> None:
    users.save(User(name="alice", password="a"))
    users.save(User(name="bob", password="b", allow_list=("d1",)))

    listed = users.list_users()

    assert sorted(u.name for _, u in listed) == ["alice", "bob"]
    assert [p for p, _ in listed] == sorted(p for p, _ in listed)


def test_user_store_is_empty(users: UserStore) -> None:
    assert users.is_empty()

    users.save(User(name="admin", password="pw"))

    assert not users.is_empty()


def test_user_store_remove(users: UserStore) -> None:
    users.save(User(name="alice", password="pw"))

    users.remove("alice")

    with pytest.raises(UserNotFoundError):
        users.load("alice")


def test_user_store_remove_missing_raises(users: UserStore) -> None:
    with pytest.raises(UserNotFoundError, match="User does not exist: ghost"):
        users.remove("ghost")


def test_user_store_rename_moves_record(users: UserStore) -> None:
    users.save(User(name="alice", password="pw", allow_list=("d1",)))

    users.rename("alice", User(name="alicia", password="pw", allow_list=("d1",)))

    assert users.load("alicia").allow_list == ("d1",)
    with pytest.raises(UserNotFoundError):
        users.load("alice")


def test_user_store_rename_to_same_name_keeps_record(users: UserStore) -> None:
    users.save(User(name="alice", password="old"))

    users.rename("alice", User(name="alice", password="new"))

    assert users.load("alice").password == "new"


def test_user_store_persists_confirmed_access_session(users: UserStore) -> None:
    users.save(User(name="alice", password="pw", allow_list=("d1",)))
    user = users.load("alice")
    session = AccessSession(user.access)
    session.submit(Append(("d2",)))
    session.submit(Convert())
    session.submit(Confirm())

    users.save(user.with_access(session.result()))

    assert users.load("alice").access == AccessState(
        mode=AccessMode.BLOCK_LIST, drives=("d1", "d2")
    )
