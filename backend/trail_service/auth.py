from fastapi import Header, HTTPException, Request, status


async def require_token(request: Request, authorization: str = Header(default="")):
    """Simple bearer token guard. Set API_TOKEN env var to enable."""
    api_token = request.app.state.settings.api_token
    if not api_token:
        return
    if not authorization.lower().startswith("bearer "):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="missing bearer token")
    token = authorization.split(" ", 1)[1]
    if token != api_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="invalid token")
