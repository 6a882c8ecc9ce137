# Import all models so Alembic can detect them
from app.models.song import Song, Award, RatingHistory, CommentHistory
from app.models.artist import Artist
from app.models.blog import BlogPost

__all__ = [
    "Song",
    "Award",
    "RatingHistory",
    "CommentHistory",
    "Artist",
    "BlogPost",
]
