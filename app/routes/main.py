from flask import Blueprint, redirect, url_for, jsonify, request

main_bp = Blueprint('main', __name__)

@main_bp.route('/')
def index():
    return redirect(url_for('tic_tac_toe.index'))

@main_bp.app_errorhandler(404)
def page_not_found(e):
    if request.path.startswith('/tic-tac-toe/api/'):
        return jsonify({'error': 'Not found'}), 404
    return 'Page not found', 404
