from fastapi import Request
from playground.languages import LanguageProfile
from playground.services.run import Executor


def get_executor(request: Request) -> Executor:
    return request.app.state.executor


def get_profiles(request: Request) -> dict[str, LanguageProfile]:
    return request.app.state.profiles
