"""Authentication and authorization.

Learn: One authentication path — email/password at login yields a
signed bearer token; every later request presents that token in
`Authorization: Bearer <token>`. The pieces, leaf to root:

1. tokens.TokenCodec → issue / verify signed, 7-day tokens
2. identity.IdentityResolver → token subject → live user (no password)
3. dependencies → mandatory and optional request gates
4. ownership → who may read or change a post
"""
