from src.firedrill_board.firedrill_board.main import create_app

app = create_app()

if __name__ == "__main__":
    app.run(threaded=True)
