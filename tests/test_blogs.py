"""
Tests for compose, list and delete endpoints.
"""

import pytest
from faker import Faker

from blogapp import create_app, db
from blogapp.models import Post
from tests.conftest import make_title, make_content, _create_user

fake = Faker()


class TestCompose:
    """Tests for /compose"""

    def test_compose_form(self, logged_in_client):
        response = logged_in_client.get('/compose')

        assert response.status_code == 200
        assert b'Add New Blog' in response.data

    def test_compose_success(self, logged_in_client):
        title = make_title()
        content = make_content()

        response = logged_in_client.post('/compose', data={'title': title, 'content': content})

        assert response.status_code == 302
        assert response.headers['Location'].endswith('/blogs')
        post = Post.query.one()
        assert post.title == title
        assert post.content == content

    def test_compose_minimum_lengths_accepted(self, logged_in_client):
        response = logged_in_client.post('/compose', data={'title': 't' * 20, 'content': 'c' * 100})

        assert response.status_code == 302
        assert Post.query.count() == 1

    def test_compose_short_title(self, logged_in_client):
        response = logged_in_client.post('/compose', data={'title': 't' * 19, 'content': make_content()})

        assert response.status_code == 400
        assert response.json == {'error': 'title must be at least 20 characters'}
        assert Post.query.count() == 0

    def test_compose_short_content(self, logged_in_client):
        response = logged_in_client.post('/compose', data={'title': make_title(), 'content': 'c' * 99})

        assert response.status_code == 400
        assert Post.query.count() == 0

    def test_compose_missing_fields(self, logged_in_client):
        response = logged_in_client.post('/compose', data={})

        assert response.status_code == 400
        assert 'error' in response.json

    def test_rejected_post_not_listed(self, logged_in_client):
        logged_in_client.post('/compose', data={'title': 'short title', 'content': make_content()})

        response = logged_in_client.get('/blogs')

        assert b'No Blogs Found' in response.data


class TestListBlogs:
    """Tests for /blogs"""

    def test_list_empty(self, logged_in_client):
        response = logged_in_client.get('/blogs')

        assert response.status_code == 200
        assert b'No Blogs Found' in response.data

    def test_list_with_posts(self, logged_in_client):
        title = make_title()
        logged_in_client.post('/compose', data={'title': title, 'content': make_content()})

        response = logged_in_client.get('/blogs')

        assert response.status_code == 200
        assert title.encode() in response.data
        assert b'No Blogs Found' not in response.data


class TestDeleteBlog:
    """Tests for /delete/<id>"""

    def test_delete_success(self, logged_in_client):
        logged_in_client.post('/compose', data={'title': make_title(), 'content': make_content()})
        post_id = Post.query.one().id

        response = logged_in_client.get(f'/delete/{post_id}')

        assert response.status_code == 302
        assert response.headers['Location'].endswith('/blogs')
        assert Post.query.count() == 0

    def test_delete_nonexistent(self, logged_in_client):
        logged_in_client.post('/compose', data={'title': make_title(), 'content': make_content()})

        response = logged_in_client.get('/delete/99999')

        assert response.status_code == 302
        assert response.headers['Location'].endswith('/blogs')
        assert Post.query.count() == 1

    def test_any_user_can_delete(self, logged_in_client, app):
        """No per-post ownership: posts are not tied to their author."""
        post = Post(title=make_title(), content=make_content())
        db.session.add(post)
        db.session.commit()

        logged_in_client.get(f'/delete/{post.id}')

        assert Post.query.count() == 0


class TestMemoryStoreApp:
    """The same endpoints backed by the in-memory post store"""

    @pytest.fixture
    def memory_app(self):
        app = create_app('testing', POST_STORE='memory')
        with app.app_context():
            db.create_all()
            _create_user(username='memory_writer', password='memorypass1')
            yield app
            db.drop_all()

    def test_compose_list_delete(self, memory_app):
        client = memory_app.test_client()
        client.post('/login', data={'username': 'memory_writer', 'password': 'memorypass1'})
        title = 't' * 20

        client.post('/compose', data={'title': title, 'content': 'c' * 100})
        listed = client.get('/blogs')
        client.get('/delete/1')
        emptied = client.get('/blogs')

        assert title.encode() in listed.data
        assert b'No Blogs Found' in emptied.data
        assert memory_app.extensions['post_store'].count() == 0
        # Posts never reach the database with the memory store
        assert Post.query.count() == 0
