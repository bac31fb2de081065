import azure.functions as func

from movie_recommendation_service.blueprints.recommendations_bp import bp as recommendations_bp

app = func.FunctionApp()

app.register_blueprint(recommendations_bp)
