"""
Movie API Endpoints

Collection routes answer on ``/movies`` and ``/movies/``, item routes on
``/movies/{id}`` with an optional trailing slash. A method that a path
does not declare gets a 405 from the router.
"""

from typing import Any, Dict, List, Optional
from uuid import UUID

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Response, status

from moviepin.api.deps import get_movie_service, valid_movie_id
from moviepin.core.logging import get_logger
from moviepin.models import AddMoviesResponse, ErrorResponse, MovieSchema
from moviepin.services.data import (
    MovieNotFoundError,
    MovieService,
    PartialUpdateError,
)

logger = get_logger(__name__)

router = APIRouter()

ERR_NOT_EXISTS = "movie does not exist"
ERR_FAILED_TO_GET_MOVIE = "failed to get movie"
ERR_FAILED_TO_GET_MOVIES = "failed to get movies"
ERR_FAILED_TO_ADD_MOVIE = "failed to add movie"
ERR_FAILED_TO_UPDATE_MOVIE = "failed to update movie"
ERR_FAILED_TO_DELETE_MOVIE = "failed to delete movie"
ERR_FAILED_TO_REPLACE_MOVIES = "failed to replace movies"

OPTIONS_HEADERS = {
    "Access-Control-Allow-Methods": "GET, POST, PUT, PATCH, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Max-Age": "86400",  # 24 hours
}

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=ERR_NOT_EXISTS)


def internal_error(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


# ==========================================
# COLLECTION ROUTES
# ==========================================

@router.get("", response_model=List[MovieSchema], responses=ERROR_RESPONSES)
@router.get("/", response_model=List[MovieSchema], include_in_schema=False)
async def list_movies(service: MovieService = Depends(get_movie_service)):
    """Get all movies"""

    try:
        return await service.list_movies()
    except Exception as e:
        logger.error("Failed to get movies", error=str(e))
        raise internal_error(ERR_FAILED_TO_GET_MOVIES)


@router.post("", response_model=AddMoviesResponse, status_code=201, responses=ERROR_RESPONSES)
@router.post("/", response_model=AddMoviesResponse, status_code=201, include_in_schema=False)
async def add_movies(
    movies: List[MovieSchema],
    service: MovieService = Depends(get_movie_service),
):
    """
    Add a list of movies.

    Every movie is validated before any is stored. Movies are then added
    independently: the response lists added and failed movies and is a
    201 unless every single one failed.
    """

    result = await service.add_movies(movies)

    if movies and not result.added_movies:
        raise internal_error(ERR_FAILED_TO_ADD_MOVIE)

    return result


@router.put("", status_code=204, response_class=Response, responses=ERROR_RESPONSES)
@router.put("/", status_code=204, response_class=Response, include_in_schema=False)
async def replace_movies(
    movies: List[MovieSchema],
    service: MovieService = Depends(get_movie_service),
):
    """Replace the whole collection, all or nothing"""

    try:
        await service.replace_movies(movies)
    except Exception as e:
        logger.error("Failed to replace movies", count=len(movies), error=str(e))
        raise internal_error(ERR_FAILED_TO_REPLACE_MOVIES)

    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ==========================================
# ITEM ROUTES
# ==========================================

@router.get("/{movie_id}", response_model=None, responses=ERROR_RESPONSES)
@router.get("/{movie_id}/", response_model=None, include_in_schema=False)
async def get_movie(
    movie_id: UUID = Depends(valid_movie_id),
    rating: Optional[str] = Query(None, description="Set to 'true' to include the average rating"),
    service: MovieService = Depends(get_movie_service),
):
    """Get movie by ID, with its rating when ``rating=true``"""

    try:
        if rating == "true":
            return await service.get_movie_rating(movie_id)
        return await service.get_movie(movie_id)
    except MovieNotFoundError:
        raise not_found()
    except Exception as e:
        logger.error("Failed to get movie", movie_id=str(movie_id), error=str(e))
        raise internal_error(ERR_FAILED_TO_GET_MOVIE)


@router.put("/{movie_id}", status_code=204, response_class=Response, responses=ERROR_RESPONSES)
@router.put("/{movie_id}/", status_code=204, response_class=Response, include_in_schema=False)
async def update_movie(
    movie: MovieSchema,
    movie_id: UUID = Depends(valid_movie_id),
    service: MovieService = Depends(get_movie_service),
):
    """Replace a movie with the movie in the request body"""

    try:
        await service.update_movie(movie_id, movie)
    except MovieNotFoundError:
        raise not_found()
    except Exception as e:
        logger.error("Failed to update movie", movie_id=str(movie_id), error=str(e))
        raise internal_error(ERR_FAILED_TO_UPDATE_MOVIE)

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{movie_id}", status_code=204, response_class=Response, responses=ERROR_RESPONSES)
@router.patch("/{movie_id}/", status_code=204, response_class=Response, include_in_schema=False)
async def patch_movie(
    payload: Dict[str, Any] = Body(...),
    movie_id: UUID = Depends(valid_movie_id),
    service: MovieService = Depends(get_movie_service),
):
    """Update only the fields present in the request body"""

    try:
        await service.patch_movie(movie_id, payload)
    except MovieNotFoundError:
        raise not_found()
    except PartialUpdateError as e:
        logger.info("Rejected movie update", movie_id=str(movie_id), field=e.field, reason=e.reason)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{ERR_FAILED_TO_UPDATE_MOVIE}: {e}",
        )
    except Exception as e:
        logger.error("Failed to update movie", movie_id=str(movie_id), error=str(e))
        raise internal_error(ERR_FAILED_TO_UPDATE_MOVIE)

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{movie_id}", status_code=204, response_class=Response, responses=ERROR_RESPONSES)
@router.delete("/{movie_id}/", status_code=204, response_class=Response, include_in_schema=False)
async def delete_movie(
    movie_id: UUID = Depends(valid_movie_id),
    service: MovieService = Depends(get_movie_service),
):
    """Delete movie"""

    try:
        await service.delete_movie(movie_id)
    except MovieNotFoundError:
        raise not_found()
    except Exception as e:
        logger.error("Failed to delete movie", movie_id=str(movie_id), error=str(e))
        raise internal_error(ERR_FAILED_TO_DELETE_MOVIE)

    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ==========================================
# OPTIONS
# ==========================================

@router.options("", status_code=204, response_class=Response)
@router.options("/", status_code=204, response_class=Response, include_in_schema=False)
@router.options("/{movie_id}", status_code=204, response_class=Response, include_in_schema=False)
@router.options("/{movie_id}/", status_code=204, response_class=Response, include_in_schema=False)
async def movies_options():
    """Allowed methods and CORS metadata"""
    return Response(status_code=status.HTTP_204_NO_CONTENT, headers=OPTIONS_HEADERS)
