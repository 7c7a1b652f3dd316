from flask_cors import CORS

from storefront.app.cosmic import CosmicClient

# Singletons (initialized in app factory)
cors = CORS()
cosmic = CosmicClient()
