from posts_app.settings import Settings

settings = Settings()
