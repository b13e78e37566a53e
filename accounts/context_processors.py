from .utils import get_profile


def profile(request):
    return {"profile": get_profile(request.user)}
