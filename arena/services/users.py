from sqlalchemy.orm import Session
from datetime import datetime

from arena.db.users import Users, LoginLog
from arena.core.security import get_password_hash, verify_password

def get_active_user_by_name(name: str, db: Session) -> Users | None:
    return db.query(Users).filter(Users.name == name, Users.is_active == True).first()


def register_user(name: str, password: str, db: Session) -> Users:
    existing = db.query(Users).filter(Users.name == name).first()
    if existing:
        raise ValueError("이미 존재하는 사용자입니다.")

    user = Users(
        name=name,
        password_hash=get_password_hash(password)
    )

    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def authenticate_user(name: str, password: str, db: Session) -> Users | None:
    user = get_active_user_by_name(name, db)
    if not user or not verify_password(password, user.password_hash):
        return None
    return user


def create_login_log(user: Users, ip: str, user_agent: str, db: Session):
    now = datetime.now()
    log = LoginLog(
        user_id=user.id,
        ip_address=ip,
        user_agent=user_agent,
        login_time=now
    )
    user.last_login_time = now

    db.add(log)
    db.commit()
