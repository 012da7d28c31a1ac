from city_letter_finder.app import create_app


app = create_app()
