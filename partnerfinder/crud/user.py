from uuid import UUID

from sqlalchemy import func
from sqlalchemy.sql.elements import ColumnElement
from sqlmodel import Session, col, select

from partnerfinder.core.security import get_password_hash, verify_password
from partnerfinder.models.auth_schemas import UserUpdateMe
from partnerfinder.models.relationship import UserRelationship
from partnerfinder.models.user import User, UserRegister


def get_user_by_id(*, session: Session, user_id: UUID) -> User | None:
    """
    Get a user by their ID.

    Parameters:
        session (Session): The database session.
        user_id (UUID): The ID of the user to retrieve.
    Returns:
        User | None: The user object if found, otherwise None.
    """
    return session.get(User, user_id)


def get_users_by_ids(*, session: Session, user_ids: list[UUID]) -> dict[UUID, User]:
    if not user_ids:
        return {}
    users = session.exec(select(User).where(col(User.id).in_(user_ids))).all()
    return {user.id: user for user in users}


def get_user_by_email(*, session: Session, email: str) -> User | None:
    """
    Get a user by their email address, ignoring case.

    Parameters:
        session (Session): The database session.
        email (str): The email address of the user to retrieve.
    Returns:
        User | None: The user object if found, otherwise None.
    """
    statement = select(User).where(func.lower(User.email) == email.strip().lower())
    return session.exec(statement).first()


def get_user_by_username(*, session: Session, username: str) -> User | None:
    statement = select(User).where(
        func.lower(User.username) == username.strip().lower()
    )
    return session.exec(statement).first()


def create_user(
    *,
    session: Session,
    user_register: UserRegister,
) -> User:
    """
    Create a new user in the database.

    Parameters:
        session (Session): The database session.
        user_register (UserRegister): The registration data.
    Returns:
        User: The created user object.
    Raises:
        IntegrityError: If a user with the same email or username already exists.
    """
    db_obj = User(
        email=str(user_register.email).strip(),
        username=user_register.username.strip(),
        full_name=user_register.full_name.strip(),
        hashed_password=get_password_hash(user_register.password),
    )
    session.add(db_obj)
    session.flush()  # Check for unique constraints
    return db_obj


def update_user(
    *,
    session: Session,
    db_user: User,
    user_in: UserUpdateMe,
) -> User:
    """
    Apply a profile update to an existing user.

    Only fields present in the request are touched. Coordinates are stored
    as two separate columns.
    """
    user_data = user_in.model_dump(exclude_unset=True, exclude={"location_coords"})
    extra_data = {}
    if "location_coords" in user_in.model_fields_set:
        coords = user_in.location_coords
        extra_data["location_lat"] = coords.lat if coords else None
        extra_data["location_lng"] = coords.lng if coords else None
    db_user.sqlmodel_update(user_data, update=extra_data)
    session.add(db_user)
    session.flush()
    return db_user


def set_password(*, session: Session, db_user: User, password: str) -> User:
    db_user.hashed_password = get_password_hash(password)
    session.add(db_user)
    session.flush()
    return db_user


def authenticate(*, session: Session, email: str, password: str) -> User | None:
    """
    Authenticate a user by email and password.

    Parameters:
        session (Session): The database session.
        email (str): The email address of the user.
        password (str): The password of the user.
    Returns:
        User | None: The authenticated user object if credentials are valid, otherwise None.
    """
    db_user = get_user_by_email(session=session, email=email)
    if not db_user:
        return None
    if not verify_password(password, db_user.hashed_password):
        return None
    return db_user


def searchable_fields() -> ColumnElement[str]:
    """The text free-form partner queries are matched against."""
    return col(User.username) + " " + col(User.full_name) + " " + col(User.email)


def search_partners(
    *,
    session: Session,
    requester_id: UUID,
    query: str,
    skill: str,
    location: str,
    limit: int,
) -> list[User]:
    """
    Get candidate partners for a user.

    Excludes the requester and everyone they share a relationship record
    with (pending or accepted). Every non-empty filter is a case-insensitive
    substring match and all of them must hold. Results come in registration
    order.

    Parameters:
        session (Session): The database session.
        requester_id (UUID): The user searching for partners.
        query (str): Matched against username, full name and email.
        skill (str): Matched against the skill level.
        location (str): Matched against the location text.
        limit (int): The maximum number of users to return.
    Returns:
        list[User]: The matching users.
    """
    related_as_a = select(UserRelationship.user_b_id).where(
        UserRelationship.user_a_id == requester_id
    )
    related_as_b = select(UserRelationship.user_a_id).where(
        UserRelationship.user_b_id == requester_id
    )
    stmt = select(User).where(
        col(User.id) != requester_id,
        col(User.id).not_in(related_as_a),
        col(User.id).not_in(related_as_b),
    )
    if query:
        stmt = stmt.where(searchable_fields().icontains(query, autoescape=True))
    if skill:
        stmt = stmt.where(col(User.skill).icontains(skill, autoescape=True))
    if location:
        stmt = stmt.where(col(User.location).icontains(location, autoescape=True))
    stmt = stmt.order_by(col(User.created_at), col(User.username)).limit(limit)
    return list(session.exec(stmt).all())
