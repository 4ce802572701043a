from typing import List, Optional
from pydantic import BaseModel, ConfigDict


class TMDBModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra='ignore')


class Credit(TMDBModel):
    id: int
    title: Optional[str] = None
    name: Optional[str] = None
    overview: Optional[str] = None
    media_type: Optional[str] = None
    release_date: Optional[str] = None
    first_air_date: Optional[str] = None
    popularity: float = 0.0
    adult: bool = False
    genre_ids: List[int] = []
    video: bool = False
    original_language: Optional[str] = None
    original_title: Optional[str] = None
    original_name: Optional[str] = None
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None


class Person(TMDBModel):
    id: int
    name: str
    popularity: float = 0.0
    adult: bool = False
    gender: int = 0
    also_known_as: List[str] = []
    known_for: List[Credit] = []
    biography: Optional[str] = None
    birthday: Optional[str] = None
    deathday: Optional[str] = None
    homepage: Optional[str] = None
    imdb_id: Optional[str] = None
    known_for_department: Optional[str] = None
    place_of_birth: Optional[str] = None
    profile_path: Optional[str] = None


class PersonSearchResult(TMDBModel):
    page: int
    total_pages: int
    total_results: int
    results: List[Person] = []


class ErrorResponse(BaseModel):
    detail: str
