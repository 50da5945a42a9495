"""Unit tests for the permission gate."""

import pytest

from labclient.errors import ForbiddenError, NotFoundError
from labclient.mock import ProjectPermission, authorize
from labclient.models import VisibilityLevel


@pytest.mark.parametrize("username", ["alice", "bob", "carol", "root"])
def test_members_and_admin_can_view_private(store, project, users, username):
    assert authorize(store, users[username], project.id, ProjectPermission.VIEW) is project


def test_outsider_cannot_view_private(store, project, users):
    with pytest.raises(ForbiddenError):
        authorize(store, users["mallory"], project.id, ProjectPermission.VIEW)


def test_anonymous_cannot_view_private(store, project):
    with pytest.raises(ForbiddenError):
        authorize(store, None, project.id, ProjectPermission.VIEW)


def test_internal_visible_to_any_authenticated_user(store, users):
    internal = store.add_project("internal", owner=users["alice"], visibility=VisibilityLevel.INTERNAL)
    assert authorize(store, users["mallory"], internal.id, ProjectPermission.VIEW) is internal
    with pytest.raises(ForbiddenError):
        authorize(store, None, internal.id, ProjectPermission.VIEW)


def test_public_visible_to_anonymous(store, users):
    public = store.add_project("public", owner=users["alice"], visibility=VisibilityLevel.PUBLIC)
    assert authorize(store, None, public.id, ProjectPermission.VIEW) is public


@pytest.mark.parametrize("username", ["alice", "bob", "root"])
def test_developer_and_above_can_mutate(store, project, users, username):
    assert authorize(store, users[username], project.id, ProjectPermission.MUTATE) is project


@pytest.mark.parametrize("username", ["carol", "mallory"])
def test_reporter_and_outsider_cannot_mutate(store, project, users, username):
    with pytest.raises(ForbiddenError):
        authorize(store, users[username], project.id, ProjectPermission.MUTATE)


def test_public_project_still_requires_membership_to_mutate(store, users):
    public = store.add_project("public", owner=users["alice"], visibility=VisibilityLevel.PUBLIC)
    with pytest.raises(ForbiddenError):
        authorize(store, users["mallory"], public.id, ProjectPermission.MUTATE)


def test_missing_project_is_not_found_not_forbidden(store, users):
    with pytest.raises(NotFoundError):
        authorize(store, users["mallory"], 4242, ProjectPermission.VIEW)
