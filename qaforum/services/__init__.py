"""
Q&A Forum Backend - Services Layer
====================================

What:  Business logic between routes (HTTP) and the database.
How:   Each service is a stateless singleton; routes pass in the request's
       AsyncSession. Services raise NotFoundError / DatabaseError and never
       build HTTP responses.

Service Inventory:
    - QuestionService: create, list, get, search, update, cascading delete
    - AnswerService:   create, list, bulk delete per question
    - VoteService:     append-only votes on questions and answers
"""
