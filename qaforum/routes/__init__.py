"""
Q&A Forum Backend - API Routes Package
========================================

Route Inventory:
    - questions.py: POST/GET /questions, GET /questions/search,
                    GET/PUT/DELETE /questions/{id}
    - answers.py:   POST/GET/DELETE /questions/{id}/answers
    - votes.py:     POST /questions/{id}/vote, POST /answer/{id}/vote
    - health.py:    GET /, GET /health

Routes are thin: extract path/body, call a service, wrap the result in the
response envelope. Business rules live in services.
"""
