"""Pydantic schemas for the similar-movies API."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class SimilarRequest(BaseModel):
    """Request payload for the `/similar` endpoint."""

    title: str = Field(..., min_length=1, description="Exact movie title as it appears in movies.csv.")
    k: int = Field(5, ge=1, le=50, description="Number of similar movies to return (1..50).")
    metric: Optional[str] = Field(None, description="euclidean/manhattan/cosine; default from config.")
    include_self: Optional[bool] = Field(None, description="Keep the query movie in the results.")


class SimilarMovieItem(BaseModel):
    movieId: int
    title: str
    distance: float


class SimilarResponse(BaseModel):
    title: str
    resolved_movieId: int
    metric: str
    k: int
    results: list[SimilarMovieItem]


class HealthResponse(BaseModel):
    status: str
    movies: int
    users: int
