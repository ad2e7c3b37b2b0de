import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from backend.auth.jwt_handler import TokenIssuer
from backend.auth.passwords import PasswordHasher
from backend.auth.service import AuthService
from backend.auth.store import CredentialStore, SqlAlchemyCredentialStore
from backend.core import config
from backend.core.errors import AuthError, InternalError
from backend.database import create_db_engine, create_schema, create_session_factory
from backend.routes import auth_routes, user_routes

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={'success': False, 'message': message})


async def handle_auth_error(request: Request, exc: AuthError) -> JSONResponse:
    return error_response(exc.status_code, exc.message)


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(400, 'Invalid request body')


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception('Unhandled error on %s %s', request.method, request.url.path)
    return error_response(InternalError.status_code, InternalError.default_message)


def build_auth_service(store: CredentialStore) -> AuthService:
    return AuthService(
        store=store,
        hasher=PasswordHasher(rounds=config.BCRYPT_ROUNDS),
        tokens=TokenIssuer(
            secret_key=config.JWT_SECRET_KEY,
            algorithm=config.JWT_ALGORITHM,
            expires_minutes=config.JWT_EXPIRES_MINUTES,
        ),
    )


def create_app(store: CredentialStore | None = None) -> FastAPI:
    logging.basicConfig(level=config.LOG_LEVEL)
    config.validate_runtime_config()
    if config.JWT_SECRET_KEY == config.INSECURE_DEFAULT_SECRET:
        logger.warning('JWT_SECRET_KEY is not set; using an insecure default secret.')

    app = FastAPI(title='School Dashboard API')

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )

    engine = None
    if store is None:
        engine = create_db_engine(config.DATABASE_URL)
        store = SqlAlchemyCredentialStore(create_session_factory(engine))
    app.state.auth_service = build_auth_service(store)

    @app.on_event('startup')
    def initialize_database() -> None:
        if engine is None:
            return
        try:
            create_schema(engine)
        except SQLAlchemyError:
            logger.exception('Database initialization failed. Check DATABASE_URL and database credentials.')

    @app.get('/')
    def root():
        return {'status': 'School Dashboard API Running'}

    app.add_exception_handler(AuthError, handle_auth_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    app.include_router(auth_routes.router, prefix='/auth')
    app.include_router(user_routes.router, prefix='/users')
    return app


app = create_app()
