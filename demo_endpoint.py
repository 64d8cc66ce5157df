"""
Quick demo script to run the BeeConta API locally.

This script starts a local server and shows how to make requests to it.
"""

import uvicorn

if __name__ == "__main__":
    print("=" * 60)
    print("Starting BeeConta API Demo")
    print("=" * 60)
    print()
    print("📌 API Endpoints:")
    print("   - Health Check:  GET  http://localhost:8000/health")
    print("   - Sign in:       POST http://localhost:8000/auth/login")
    print("   - Session:       GET  http://localhost:8000/session")
    print("   - Companies:     GET  http://localhost:8000/companies")
    print("   - API Docs:           http://localhost:8000/docs")
    print("   - ReDoc:              http://localhost:8000/redoc")
    print()
    print("🔐 Authentication:")
    print("   All endpoints except /health and the public /auth flows require:")
    print("   Authorization: Bearer <access_token>")
    print()
    print("📝 Test with curl:")
    print('   curl -X POST "http://localhost:8000/auth/login" \\')
    print('     -H "Content-Type: application/json" \\')
    print('     -d \'{"email": "ana@colmeia.com.br", "password": "secret"}\'')
    print()
    print("=" * 60)
    print("Starting server on http://localhost:8000")
    print("Press Ctrl+C to stop")
    print("=" * 60)
    print()

    uvicorn.run(
        "beeconta.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
