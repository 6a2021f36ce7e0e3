# tests/unit/test_manage.py
from fastmoney.crud import create_user, get_user_by_username
from fastmoney.manage import main


def test_promote_and_demote(settings, db):
    create_user(db, "alice", "pw1", "a@x.com")

    assert main(["promote", "alice"], settings=settings) == 0
    db.expire_all()
    assert get_user_by_username(db, "alice").role == "admin"

    assert main(["demote", "alice"], settings=settings) == 0
    db.expire_all()
    assert get_user_by_username(db, "alice").role == "user"


def test_unknown_user_exits_2(settings, db, capsys):
    assert main(["promote", "ghost"], settings=settings) == 2
    assert "ghost" in capsys.readouterr().err
