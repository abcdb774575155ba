import pytest
from flask_jwt_extended import create_access_token

from newsdesk import create_app
from newsdesk.extensions import db
from newsdesk.models.user import User
from newsdesk.models.post import Post
from newsdesk.models.content_page import ContentPage


@pytest.fixture
def app():
    app = create_app("testing")

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    def _make_user(role="contributor", email=None, password="secret-password", is_active=True):
        user = User()
        user.email = email or f"{role}-{User.query.count()}@example.com"
        user.first_name = "Test"
        user.last_name = role.title()
        user.role = role
        user.is_active = is_active
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
        return user

    return _make_user


@pytest.fixture
def auth_headers(make_user):
    """``auth_headers("editor")`` -> (user, headers) for a fresh user of that role."""
    def _auth_headers(role="contributor", user=None):
        user = user or make_user(role)
        token = create_access_token(identity=user.id, additional_claims={"role": user.role})
        return user, {"Authorization": f"Bearer {token}"}

    return _auth_headers


@pytest.fixture
def seed_post(make_user):
    def _seed_post(author=None, **overrides):
        author = author or make_user("contributor")
        post = Post()
        post.title = overrides.pop("title", "Test Post")
        post.slug = overrides.pop("slug", "test-post")
        post.body = overrides.pop(
            "body",
            "This is a test post body with enough content to meet the minimum requirements.",
        )
        post.tags = overrides.pop("tags", ["test", "example"])
        post.categories = overrides.pop("categories", [])
        post.status = overrides.pop("status", "draft")
        post.author_id = author.id
        for field, value in overrides.items():
            setattr(post, field, value)
        post.refresh_reading_time()
        db.session.add(post)
        db.session.commit()
        return post

    return _seed_post


@pytest.fixture
def seed_content_page(app):
    def _seed_content_page(**overrides):
        page = ContentPage()
        page.slug = app.config["CONTENT_PAGE_SLUG"]
        page.status = overrides.pop("status", "draft")
        page.sections = overrides.pop("sections", [
            {
                "type": "hero",
                "props": {
                    "imageUrl": "https://example.com/hero.jpg",
                    "title": "Test Hero",
                    "subtitle": "Test subtitle",
                },
            }
        ])
        page.seo = overrides.pop("seo", {"title": "Test Page", "description": "Test description"})
        page.version = overrides.pop("version", 1)
        for field, value in overrides.items():
            setattr(page, field, value)
        db.session.add(page)
        db.session.commit()
        return page

    return _seed_content_page
