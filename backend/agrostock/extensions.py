# Overview: Flask extension instances for the in-memory store.

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()
