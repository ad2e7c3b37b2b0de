import pytest

from backend.core.errors import Forbidden, NotFoundError
from backend.models.user import Role
from backend.routes import user_routes


def _token_for(auth_service, role: Role) -> str:
    user = auth_service.store.create_user(
        name=role.value,
        email=f'{role.value}@school.com',
        hashed_password=auth_service.hasher.hash('password123'),
        role=role,
    )
    return auth_service.issue_token(user)


def _route_gate(path: str):
    route = next(route for route in user_routes.router.routes if route.path == path)
    (gate,) = route.dependencies
    return gate.dependency


def test_list_users_returns_public_records(auth_service) -> None:
    auth_service.signup(name='Student', email='s@school.com', password='p1')
    _token_for(auth_service, Role.ADMIN)

    response = user_routes.list_users(service=auth_service)

    assert response.success is True
    users = response.model_dump(mode='json')['data']
    assert {user['email'] for user in users} == {'s@school.com', 'admin@school.com'}
    assert all(set(user) == {'id', 'name', 'email', 'role'} for user in users)


def test_list_users_gate_admits_only_admins(auth_service) -> None:
    gate = _route_gate('')
    admin_token = _token_for(auth_service, Role.ADMIN)
    teacher_token = _token_for(auth_service, Role.TEACHER)

    assert gate(authorization=f'Bearer {admin_token}', service=auth_service).role is Role.ADMIN
    with pytest.raises(Forbidden):
        gate(authorization=f'Bearer {teacher_token}', service=auth_service)


def test_get_user_gate_admits_teachers_but_not_students(auth_service) -> None:
    gate = _route_gate('/{user_id}')
    teacher_token = _token_for(auth_service, Role.TEACHER)
    student_token = _token_for(auth_service, Role.STUDENT)

    assert gate(authorization=f'Bearer {teacher_token}', service=auth_service).role is Role.TEACHER
    with pytest.raises(Forbidden):
        gate(authorization=f'Bearer {student_token}', service=auth_service)


def test_get_user_returns_public_record(auth_service) -> None:
    student = auth_service.signup(name='Student', email='s@school.com', password='p1').user

    response = user_routes.get_user(student.id, service=auth_service)

    assert response.model_dump(mode='json')['data'] == {
        'id': student.id,
        'name': 'Student',
        'email': 's@school.com',
        'role': 'student',
    }


def test_get_user_returns_404_for_unknown_id(auth_service) -> None:
    with pytest.raises(NotFoundError) as exception_info:
        user_routes.get_user('missing', service=auth_service)

    assert exception_info.value.status_code == 404
