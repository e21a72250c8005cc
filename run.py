from meetai import create_app
from meetai.config.environment import get_env

app = create_app()

if __name__ == "__main__":
    # Each live-call socket keeps its request thread until the client leaves
    app.run(
        host="0.0.0.0",
        port=get_env("PORT", 8080),
        debug=get_env("APPLICATION_ENV") != "production",
        threaded=True,
    )
