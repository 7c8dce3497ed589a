"""
WSGI entry point for the Roadmap admin backend.

Serves the admin pages under /admin and the JSON resource API under /api.
Run `python app.py` for a local development server.
"""

from roadmap import create_app

app = create_app()

if __name__ == '__main__':
    app.run(debug=True, host='0.0.0.0', port=5000)
