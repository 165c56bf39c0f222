"""App: nucleo da busca mensal de calendario.

Subpastas:
- bootstrap/: composition root (factories, inicializacao, wiring)
- use_cases/: ponto de entrada chamado pela camada HTTP
- services/: validacao de token, fetcher e normalizer (sem IO direto)
- infra/: implementacoes concretas de IO (httpx)
- protocols/: contratos/interfaces
- domain/: modelos de dominio
- observability/: logs estruturados, metricas e hooks

Padrao: app executa; fsm governa; config configura; utils apoia.
"""
