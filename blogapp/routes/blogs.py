"""Blog routes: home page, compose, list and delete."""

from flask import Blueprint, render_template, redirect, url_for, current_app
from blogapp.services.post_store import get_post_store, NO_POSTS
from blogapp.utils import login_required, form_data

blogs_bp = Blueprint('blogs', __name__)


@blogs_bp.route('/', methods=['GET'])
def home():
    return render_template('home.html', title='Home')


@blogs_bp.route('/compose', methods=['GET'])
@login_required
def compose_form():
    return render_template('compose.html', title='Add New Blog')


@blogs_bp.route('/compose', methods=['POST'])
@login_required
def compose():
    """Create a post. Length violations come back as a 400."""
    data = form_data()
    post = get_post_store().create(data.get('title'), data.get('content'))
    current_app.logger.info(f"Post created: {post.id}")
    return redirect(url_for('blogs.list_blogs'))


@blogs_bp.route('/blogs', methods=['GET'])
@login_required
def list_blogs():
    blogs = get_post_store().list()
    return render_template('blogs.html', title='Blogs Page', blogs=blogs, empty=blogs == NO_POSTS)


@blogs_bp.route('/delete/<int:delete_id>', methods=['GET'])
@login_required
def delete_blog(delete_id):
    get_post_store().delete_by_id(delete_id)
    current_app.logger.info(f"Post delete requested: {delete_id}")
    return redirect(url_for('blogs.list_blogs'))
